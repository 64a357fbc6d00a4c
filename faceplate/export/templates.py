"""Jinja templates for the document shells and the integration guide."""

from __future__ import annotations

from jinja2 import DictLoader, Environment, StrictUndefined, select_autoescape

STYLESHEET_TAG = '<link rel="stylesheet" href="style.css">'
COMPONENTS_TAG = '<script src="components.js"></script>'
BINDINGS_TAG = '<script src="bindings.js"></script>'

INDEX_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{{ title }}</title>
  {{ stylesheet_tag }}
</head>
<body>
  <div id="plugin-wrapper">
    <div id="plugin-container" data-window-id="{{ window_id }}" data-window-name="{{ window_name }}">
{{ content }}
    </div>
  </div>
  {{ components_tag }}
  {{ bindings_tag }}
</body>
</html>
"""

PREVIEW_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{{ title }} - Preview</title>
  <style>
{{ shell_css }}
  </style>
{% for window in windows %}
  <style data-window="{{ window.slug }}">
{{ window.css }}
  </style>
{% endfor %}
</head>
<body>
  <nav id="fp-window-tabs">
{% for window in windows %}
    <button type="button" class="fp-window-tab{% if loop.first %} is-active{% endif %}" data-window-id="{{ window.id }}" data-window-slug="{{ window.slug }}">{{ window.name }}</button>
{% endfor %}
  </nav>
{% for window in windows %}
  <section id="fp-window-{{ window.slug }}" class="fp-window" data-window-id="{{ window.id }}"{% if not loop.first %} hidden{% endif %}>
    <div id="plugin-wrapper">
      <div id="plugin-container" data-window-id="{{ window.id }}" data-window-name="{{ window.name }}">
{{ window.content }}
      </div>
    </div>
  </section>
{% endfor %}
  <script>
{{ mock_relay }}
  </script>
  <script>
{{ components }}
  </script>
{% for window in windows %}
  <script data-window="{{ window.slug }}">
{{ window.bindings }}
  </script>
{% endfor %}
  <script>
{{ navigation }}
  </script>
</body>
</html>
"""

INTEGRATION_TEMPLATE = """# {{ project_name }} - Host Integration

Generated by faceplate. Load `index.html`{% if multi_window %} from the folder of the window you want to show{% endif %} in the plugin's embedded web view.

## Files

{% for path in files %}- `{{ path }}`
{% endfor %}
## Relay contract

The bindings talk to one global object that the host installs before the page scripts run:

```js
window.__relay__ = {
  getParameter(id)            // -> Promise<number>, normalized 0..1
  setParameter(id, value)     // value normalized 0..1
  beginGesture(id)
  endGesture(id)
  onParameterChange(callback) // callback(id, value); returns an unsubscribe function
};
```

{% if target == "standalone" %}This bundle was exported for standalone use: `bindings.js` starts with a mock relay that keeps values in memory, so the UI runs in any browser. Remove it before embedding in a host.
{% else %}This bundle expects the host to provide `window.__relay__`.
{% endif %}
{% for window in windows %}
## Window: {{ window.name }}{% if multi_window %} (`{{ window.slug }}/`){% endif %}

Size: {{ window.width }} x {{ window.height }} px

{% if window.parameters %}| Element | Kind | Parameter ID |
|---|---|---|
{% for row in window.parameters %}| `#{{ row.dom_id }}` | {{ row.kind }} | `{{ row.parameter_id }}` |
{% endfor %}{% else %}No bound parameters.
{% endif %}{% if window.navigation %}
Navigation: {% for row in window.navigation %}`#{{ row.dom_id }}` opens `{{ row.target }}`{% if not loop.last %}, {% endif %}{% endfor %}.
{% endif %}
{% endfor %}
{{ known_issues }}
"""


def _jinja_env() -> Environment:
    return Environment(
        loader=DictLoader(
            {
                "index.html": INDEX_TEMPLATE,
                "preview.html": PREVIEW_TEMPLATE,
                "integration.md": INTEGRATION_TEMPLATE,
            }
        ),
        autoescape=select_autoescape(["html", "xml"]),
        undefined=StrictUndefined,
        keep_trailing_newline=True,
    )


_ENV = _jinja_env()


def get_template(name: str):
    return _ENV.get_template(name)
