"""JavaScript generator for the in-page instrumentation script.

The script reports mouse and keyboard events to the binding exposed by
the browser driver and outlines the element under the cursor.
"""

import json
from dataclasses import dataclass


@dataclass
class InjectedScriptConfig:
    """Configuration for the injected script."""

    binding_name: str = "playwrightRecorderActionTracker"

    # Highlighting
    highlight: bool = True
    highlight_outline: str = "2px solid #2ea44f"

    # Selector options
    test_id_attributes: tuple = ("data-testid", "data-test")


class InjectedScriptGenerator:
    """Generates the instrumentation script injected into recorded pages."""

    INSTALLED_FLAG = "__playwrightRecorderInstalled"

    def __init__(self, config: InjectedScriptConfig | None = None):
        self.config = config or InjectedScriptConfig()

    def generate(self) -> str:
        """Generate the script.

        The script is both added to the current page and registered as an
        init script, so it guards against being installed twice.

        Returns:
            JavaScript source
        """
        config = self.config
        binding = json.dumps(config.binding_name)
        flag = json.dumps(self.INSTALLED_FLAG)
        test_id_attributes = json.dumps(list(config.test_id_attributes))

        return f'''(function() {{
  if (window[{flag}]) return;
  window[{flag}] = true;

  var BINDING = {binding};
  var TEST_ID_ATTRIBUTES = {test_id_attributes};

  function report(event) {{
    var tracker = window[BINDING];
    if (typeof tracker === "function") {{
      tracker(event);
    }}
  }}

  function cssEscape(value) {{
    return window.CSS && CSS.escape ? CSS.escape(value) : value;
  }}

  function selectorFor(element) {{
    if (!(element instanceof Element)) return "";
    if (element.id) return "#" + cssEscape(element.id);

    for (var i = 0; i < TEST_ID_ATTRIBUTES.length; i++) {{
      var value = element.getAttribute(TEST_ID_ATTRIBUTES[i]);
      if (value) return "[" + TEST_ID_ATTRIBUTES[i] + "=\\"" + value + "\\"]";
    }}

    var tag = element.tagName.toLowerCase();
    var name = element.getAttribute("name");
    if (name) return tag + "[name=\\"" + name + "\\"]";

    var parts = [];
    var current = element;
    while (current && current.nodeType === 1 && current !== document.documentElement) {{
      var part = current.tagName.toLowerCase();
      if (current.id) {{
        parts.unshift("#" + cssEscape(current.id));
        break;
      }}
      var parent = current.parentElement;
      if (parent) {{
        var siblings = Array.prototype.filter.call(parent.children, function(child) {{
          return child.tagName === current.tagName;
        }});
        if (siblings.length > 1) {{
          part += ":nth-of-type(" + (siblings.indexOf(current) + 1) + ")";
        }}
      }}
      parts.unshift(part);
      current = parent;
    }}
    return parts.join(" > ");
  }}

  function onMouse(event) {{
    report({{type: event.type, target: selectorFor(event.target)}});
  }}

  function onKeyDown(event) {{
    var element = event.target;
    var target = selectorFor(element);
    var key = event.key;
    // Read the field value once the keystroke has been applied.
    setTimeout(function() {{
      report({{
        type: "keypress",
        target: target,
        key: key,
        inputValue: element && "value" in element ? String(element.value) : ""
      }});
    }}, 0);
  }}

  document.addEventListener("mousedown", onMouse, true);
  document.addEventListener("mouseup", onMouse, true);
  document.addEventListener("click", onMouse, true);
  document.addEventListener("keydown", onKeyDown, true);
{self._generate_highlighter()}
}})();
'''

    def _generate_highlighter(self) -> str:
        if not self.config.highlight:
            return ""

        outline = json.dumps(self.config.highlight_outline)
        return f'''
  var highlighted = null;
  var previousOutline = "";
  document.addEventListener("mouseover", function(event) {{
    if (highlighted) highlighted.style.outline = previousOutline;
    highlighted = event.target instanceof HTMLElement ? event.target : null;
    if (highlighted) {{
      previousOutline = highlighted.style.outline;
      highlighted.style.outline = {outline};
    }}
  }}, true);
'''


def generate_injected_script(config: InjectedScriptConfig | None = None) -> str:
    """Generate the instrumentation script with the given configuration."""
    return InjectedScriptGenerator(config).generate()
