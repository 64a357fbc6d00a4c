"""Host integration pitfalls shipped in every bundle's INTEGRATION.md."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class KnownIssue:
    title: str
    symptom: str
    cause: str
    solution: str
    code_example: Optional[str] = None


KNOWN_ISSUES: Tuple[KnownIssue, ...] = (
    KnownIssue(
        title="White Flash on Load",
        symptom="Brief white flash when the plugin window opens",
        cause="The web view paints before the stylesheet has loaded",
        solution="Set the web view's initial background colour to the window background",
        code_example=(
            "// In your editor constructor:\n"
            "juce::WebBrowserComponent::Options options;\n"
            "options = options.withBackgroundColour(juce::Colour(0x1a, 0x1a, 0x1a));\n"
            "webView.reset(new juce::WebBrowserComponent(options));"
        ),
    ),
    KnownIssue(
        title="Controls Not Responding",
        symptom="Knobs and sliders ignore mouse input",
        cause="window.__relay__ is not installed before bindings.js runs",
        solution="Inject the relay object at document creation, before any page script executes",
        code_example=(
            "// bindings.js looks the relay up once, on load:\n"
            "//   const relay = window.__relay__;\n"
            "// Expose it from the host before navigation completes."
        ),
    ),
    KnownIssue(
        title="Slow Initial Load",
        symptom="The plugin takes one or two seconds to show its UI the first time",
        cause="The embedded web runtime initializes lazily",
        solution="Pre-warm the web view in the background and paint a loading state natively",
        code_example=(
            "void EditorComponent::paint(juce::Graphics& g) {\n"
            "    if (!webViewReady) {\n"
            "        g.fillAll(juce::Colour(0x1a, 0x1a, 0x1a));\n"
            "        g.setColour(juce::Colours::white);\n"
            '        g.drawText("Loading...", getLocalBounds(), juce::Justification::centred);\n'
            "    }\n"
            "}"
        ),
    ),
    KnownIssue(
        title="Parameter Values Not Syncing",
        symptom="Moving a control in the UI does not change the DSP parameter",
        cause="The parameter ID used by the UI does not exist on the host",
        solution="Register every parameter listed in the table above under exactly the same ID",
        code_example=(
            "// The host must answer setParameter('gain', value) for:\n"
            '// <div id="gain" data-parameter-id="gain">'
        ),
    ),
    KnownIssue(
        title="UI Freezes During Automation",
        symptom="The UI becomes unresponsive while the DAW sends automation",
        cause="Too many parameter change notifications flood the web view",
        solution="Throttle onParameterChange notifications to 30-60 per second",
        code_example=(
            "void sendParameterUpdate(const juce::String& id, float value) {\n"
            "    auto now = juce::Time::getMillisecondCounter();\n"
            "    if (now - lastUpdateTime[id] > 16) { // ~60fps\n"
            "        notifyParameterChange(id, value);\n"
            "        lastUpdateTime[id] = now;\n"
            "    }\n"
            "}"
        ),
    ),
)


def format_known_issues_markdown() -> str:
    parts = ["## Known Issues and Workarounds\n"]
    for index, issue in enumerate(KNOWN_ISSUES, start=1):
        parts.append(f"### {index}. {issue.title}\n")
        parts.append(f"**Symptom:** {issue.symptom}\n")
        parts.append(f"**Cause:** {issue.cause}\n")
        parts.append(f"**Solution:** {issue.solution}\n")
        if issue.code_example:
            parts.append(f"```cpp\n{issue.code_example}\n```\n")
    return "\n".join(parts)
