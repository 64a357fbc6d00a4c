"""Stylesheet generator.

Order: @font-face rules, reset, page and root container, base element
rule, shared rules for the element families present, then one rule per
element keyed by its normalized name. Type-specific visuals are passed
as custom properties that the shared rules consume.
"""

from __future__ import annotations

from typing import Callable, Dict, List, Sequence, Tuple

from ..core import elements as E
from ..core.elements import Element
from ..core.models import GradientConfig, Window
from ..core.names import fmt_number, normalize_name
from ..core.tree import render_order
from .dispatch import ensure_exhaustive, lookup
from .fonts import font_face_rule, font_stack
from .options import GeneratorOptions
from .values import normalized

PX_FIELDS = {
    "track_width", "thumb_width", "thumb_height", "border_radius", "border_width", "font_size",
    "label_font_size", "value_font_size", "padding", "band_gap", "gap", "spacing", "header_font_size",
    "header_height", "cell_size", "item_height", "row_height", "cursor_size", "max_content_height",
    "stroke_width", "scrollbar_width", "dot_radius", "thumb_radius",
}
DEG_FIELDS = {"start_angle", "end_angle"}

RESET_CSS = """/* Reset */
*, *::before, *::after {
  box-sizing: border-box;
  margin: 0;
  padding: 0;
}"""

BASE_ELEMENT_CSS = """/* Base element */
.element {
  position: absolute;
}

.element[hidden] {
  display: none !important;
}

.container-content > .element {
  position: absolute;
}"""

CAPTION_CSS = """/* Labels and value readouts */
.knob-label, .knob-value, .slider-label, .slider-value {
  position: absolute;
  white-space: nowrap;
  user-select: none;
  pointer-events: none;
}

.knob-label, .slider-label {
  color: var(--label-color);
  font-size: var(--label-font-size);
}

.knob-value, .slider-value {
  color: var(--value-color);
  font-size: var(--value-font-size);
}

.knob-label-top, .slider-label-top, .knob-value-top, .slider-value-top {
  bottom: 100%;
  left: 50%;
  transform: translateX(-50%);
  margin-bottom: 4px;
}

.knob-label-bottom, .slider-label-bottom, .knob-value-bottom, .slider-value-bottom {
  top: 100%;
  left: 50%;
  transform: translateX(-50%);
  margin-top: 4px;
}

.knob-label-left, .slider-label-left, .knob-value-left, .slider-value-left {
  right: 100%;
  top: 50%;
  transform: translateY(-50%);
  margin-right: 4px;
}

.knob-label-right, .slider-label-right, .knob-value-right, .slider-value-right {
  left: 100%;
  top: 50%;
  transform: translateY(-50%);
  margin-left: 4px;
}"""

FAMILY_CSS: Dict[str, str] = {
    "rotary": """/* Rotary controls */
.rotary-element {
  cursor: pointer;
  user-select: none;
  touch-action: none;
}

.rotary-element .rotary-svg {
  display: block;
  width: 100%;
  height: 100%;
  overflow: visible;
}

.rotary-element .rotary-track {
  stroke: var(--track-color);
  stroke-linecap: round;
}

.rotary-element .rotary-fill {
  stroke: var(--fill-color);
  stroke-linecap: round;
}

.rotary-element .rotary-indicator {
  stroke: var(--indicator-color);
  fill: var(--indicator-color);
  stroke-width: 2;
  stroke-linecap: round;
}

.rotary-element .rotary-step-mark {
  stroke: var(--track-color);
  stroke-width: 1;
}

.rotary-element .rotary-thumb {
  fill: var(--thumb-color, var(--indicator-color));
}""",
    "linear": """/* Linear controls */
.linear-element, .range-element {
  cursor: pointer;
  user-select: none;
  touch-action: none;
}

.linear-element .slider-track, .range-element .slider-track {
  position: absolute;
  background: var(--track-color);
  border-radius: 3px;
}

.linear-element .slider-fill, .range-element .range-fill {
  position: absolute;
  background: var(--fill-color);
  border-radius: 3px;
}

.linear-element .slider-thumb, .range-element .range-thumb {
  position: absolute;
  width: var(--thumb-width);
  height: var(--thumb-height);
  background: var(--thumb-color);
  border-radius: 4px;
}

.linear-element[data-orientation="vertical"] .slider-track,
.range-element[data-orientation="vertical"] .slider-track {
  top: 0;
  bottom: 0;
  left: 50%;
  width: 6px;
  transform: translateX(-50%);
}

.linear-element[data-orientation="horizontal"] .slider-track,
.range-element[data-orientation="horizontal"] .slider-track {
  left: 0;
  right: 0;
  top: 50%;
  height: 6px;
  transform: translateY(-50%);
}

.linear-element[data-orientation="vertical"] .slider-fill {
  bottom: 0;
  left: 50%;
  width: 6px;
  height: calc(var(--value) * 100%);
  transform: translateX(-50%);
}

.linear-element[data-orientation="horizontal"] .slider-fill {
  left: 0;
  top: 50%;
  height: 6px;
  width: calc(var(--value) * 100%);
  transform: translateY(-50%);
}

.linear-element[data-orientation="vertical"] .slider-thumb {
  left: 50%;
  bottom: calc(var(--value) * 100%);
  transform: translate(-50%, 50%);
}

.linear-element[data-orientation="horizontal"] .slider-thumb {
  top: 50%;
  left: calc(var(--value) * 100%);
  transform: translate(-50%, -50%);
}

.bipolarslider-element[data-orientation="vertical"] .slider-fill {
  bottom: calc(min(var(--value), var(--center)) * 100%);
  height: calc(max(var(--value) - var(--center), var(--center) - var(--value)) * 100%);
}

.bipolarslider-element[data-orientation="horizontal"] .slider-fill {
  left: calc(min(var(--value), var(--center)) * 100%);
  width: calc(max(var(--value) - var(--center), var(--center) - var(--value)) * 100%);
}

.bipolarslider-element .slider-center {
  position: absolute;
  background: var(--center-color);
}

.bipolarslider-element[data-orientation="vertical"] .slider-center {
  left: 0;
  right: 0;
  height: 2px;
  bottom: calc(var(--center) * 100%);
}

.bipolarslider-element[data-orientation="horizontal"] .slider-center {
  top: 0;
  bottom: 0;
  width: 2px;
  left: calc(var(--center) * 100%);
}

.notchedslider-element .slider-notch {
  position: absolute;
  background: var(--notch-color);
}

.notchedslider-element[data-orientation="vertical"] .slider-notch {
  left: 15%;
  right: 15%;
  height: 1px;
  bottom: calc(var(--notch) * 100%);
}

.notchedslider-element[data-orientation="horizontal"] .slider-notch {
  top: 15%;
  bottom: 15%;
  width: 1px;
  left: calc(var(--notch) * 100%);
}

.crossfadeslider-element .crossfade-label {
  position: absolute;
  top: 100%;
  color: var(--label-color);
  font-size: var(--label-font-size);
}

.crossfadeslider-element .crossfade-label-a {
  left: 0;
}

.crossfadeslider-element .crossfade-label-b {
  right: 0;
}""",
    "range": """/* Range sliders */
.range-element[data-orientation="vertical"] .range-fill {
  left: 50%;
  width: 6px;
  bottom: calc(var(--min-value) * 100%);
  height: calc((var(--max-value) - var(--min-value)) * 100%);
  transform: translateX(-50%);
}

.range-element[data-orientation="horizontal"] .range-fill {
  top: 50%;
  height: 6px;
  left: calc(var(--min-value) * 100%);
  width: calc((var(--max-value) - var(--min-value)) * 100%);
  transform: translateY(-50%);
}

.range-element[data-orientation="vertical"] .range-thumb {
  left: 50%;
  transform: translate(-50%, 50%);
  cursor: grab;
}

.range-element[data-orientation="horizontal"] .range-thumb {
  top: 50%;
  transform: translate(-50%, -50%);
  cursor: grab;
}

.range-element[data-orientation="vertical"] .range-thumb-min {
  bottom: calc(var(--min-value) * 100%);
}

.range-element[data-orientation="vertical"] .range-thumb-max {
  bottom: calc(var(--max-value) * 100%);
}

.range-element[data-orientation="horizontal"] .range-thumb-min {
  left: calc(var(--min-value) * 100%);
}

.range-element[data-orientation="horizontal"] .range-thumb-max {
  left: calc(var(--max-value) * 100%);
}""",
    "multislider": """/* Multi-band sliders */
.multislider-element {
  display: flex;
  gap: var(--band-gap);
  cursor: pointer;
  user-select: none;
  touch-action: none;
}

.multislider-element[data-orientation="horizontal"] {
  flex-direction: column;
}

.multislider-element .multislider-band {
  position: relative;
  flex: 1;
  background: var(--track-color);
  border-radius: 2px;
}

.multislider-element .multislider-fill {
  position: absolute;
  background: var(--fill-color);
  border-radius: 2px;
}

.multislider-element[data-orientation="vertical"] .multislider-fill {
  left: 0;
  right: 0;
  bottom: 0;
  height: calc(var(--value) * 100%);
}

.multislider-element[data-orientation="horizontal"] .multislider-fill {
  top: 0;
  bottom: 0;
  left: 0;
  width: calc(var(--value) * 100%);
}""",
    "ascii": """/* ASCII elements */
.ascii-element {
  margin: 0;
  padding: 0;
  border: none;
  overflow: hidden;
  white-space: pre;
  font-family: var(--font-family);
  font-size: var(--font-size);
  line-height: var(--line-height, 1.2);
  color: var(--text-color);
  background: var(--background-color, transparent);
  user-select: none;
}

.asciislider-element, .asciibutton-element {
  cursor: pointer;
  text-align: left;
}""",
    "switch": """/* Switches and buttons */
.switch-element {
  cursor: pointer;
  user-select: none;
  font-family: Inter, system-ui, sans-serif;
}

.button-element, .iconbutton-element, .powerbutton-element {
  display: flex;
  align-items: center;
  justify-content: center;
  gap: 6px;
  background: var(--background-color);
  color: var(--text-color);
  border: 2px solid var(--border-color);
  border-radius: var(--border-radius);
  font-size: 14px;
  font-weight: 500;
}

.button-element:active, .iconbutton-element:active, .powerbutton-element:active {
  filter: brightness(0.85);
}

.button-element[aria-pressed="true"], .iconbutton-element[aria-pressed="true"] {
  filter: brightness(1.3);
}

.iconbutton-element .icon {
  display: flex;
  width: 70%;
  height: 70%;
  color: var(--icon-color);
  fill: currentColor;
}

.iconbutton-element .icon svg {
  width: 100%;
  height: 100%;
}

.toggleswitch-element {
  background: var(--off-color);
  border: none;
  border-radius: 999px;
  transition: background-color 0.15s ease;
}

.toggleswitch-element[aria-checked="true"] {
  background: var(--on-color);
}

.toggleswitch-element .toggle-thumb {
  position: absolute;
  top: 2px;
  left: 2px;
  height: calc(100% - 4px);
  aspect-ratio: 1;
  border-radius: 50%;
  background: var(--thumb-color);
  transition: left 0.15s ease, transform 0.15s ease;
}

.toggleswitch-element[aria-checked="true"] .toggle-thumb {
  left: calc(100% - 2px);
  transform: translateX(-100%);
}

.powerbutton-element .power-led {
  width: 8px;
  height: 8px;
  border-radius: 50%;
  background: var(--led-off-color);
}

.powerbutton-element[aria-pressed="true"] .power-led {
  background: var(--led-color);
  box-shadow: 0 0 6px var(--led-color);
}

.powerbutton-element .power-icon {
  width: 50%;
  height: 50%;
  stroke: var(--text-color);
}

.rockerswitch-element {
  display: flex;
  flex-direction: column;
  align-items: center;
  justify-content: space-between;
  padding: 2px 0;
  background: var(--background-color);
  border: 1px solid var(--border-color);
  border-radius: var(--border-radius);
}

.rockerswitch-element .rocker-paddle {
  flex: 1;
  width: 80%;
  margin: 2px 0;
  background: var(--border-color);
  border-radius: 2px;
  transition: transform 0.1s ease;
}

.rockerswitch-element[data-position="0"] .rocker-paddle {
  transform: perspective(60px) rotateX(-20deg);
}

.rockerswitch-element[data-position="2"] .rocker-paddle {
  transform: perspective(60px) rotateX(20deg);
}

.rockerswitch-element .rocker-label {
  color: var(--text-color);
  font-size: 10px;
}

.checkbox-element {
  display: flex;
  align-items: center;
  gap: 8px;
}

.checkbox-element[data-label-position="left"] {
  flex-direction: row-reverse;
  justify-content: flex-end;
}

.checkbox-element input[type="checkbox"] {
  width: 18px;
  height: 18px;
  cursor: pointer;
  accent-color: var(--accent-color);
}

.checkbox-element label {
  color: var(--text-color);
  font-size: var(--font-size);
}""",
    "choice": """/* Single choice controls */
.choice-element {
  user-select: none;
  font-family: Inter, system-ui, sans-serif;
  font-size: var(--font-size, 13px);
  color: var(--text-color);
}

.dropdown-element, .combobox-element input {
  width: 100%;
  height: 100%;
  padding: 0 28px 0 8px;
  background: var(--background-color);
  color: var(--text-color);
  border: 1px solid var(--border-color);
  border-radius: var(--border-radius);
  font: inherit;
  outline: none;
  cursor: pointer;
}

.segmentbutton-element, .tabbar-element {
  display: flex;
  overflow: hidden;
  border: 1px solid var(--border-color);
  border-radius: var(--border-radius);
}

.segmentbutton-element[data-orientation="vertical"], .tabbar-element[data-orientation="vertical"] {
  flex-direction: column;
}

.segmentbutton-element .segment, .tabbar-element .tab {
  flex: 1;
  background: var(--background-color);
  color: var(--text-color);
  border: none;
  font: inherit;
  cursor: pointer;
}

.segmentbutton-element .segment.is-selected, .tabbar-element .tab[aria-selected="true"] {
  background: var(--selected-color, var(--accent-color));
  color: #ffffff;
}

.radiogroup-element {
  display: flex;
  flex-direction: column;
  gap: var(--spacing);
  background: var(--background-color);
}

.radiogroup-element[data-orientation="horizontal"] {
  flex-direction: row;
}

.radiogroup-element .radio-option {
  display: flex;
  align-items: center;
  gap: 8px;
  cursor: pointer;
}

.radiogroup-element input[type="radio"] {
  accent-color: var(--accent-color);
}

.rotaryswitch-element {
  cursor: pointer;
}

.rotaryswitch-element .rotary-switch-body {
  position: absolute;
  inset: 20%;
  border-radius: 50%;
  background: var(--background-color);
  border: 2px solid var(--border-color);
  transform: rotate(var(--pointer-angle));
  transition: transform 0.1s ease;
}

.rotaryswitch-element .rotary-switch-pointer {
  position: absolute;
  top: 4%;
  left: 50%;
  width: 3px;
  height: 35%;
  background: var(--pointer-color);
  transform: translateX(-50%);
}

.rotaryswitch-element .rotary-switch-label {
  position: absolute;
  top: 50%;
  left: 50%;
  font-size: 10px;
  transform: translate(-50%, -50%) rotate(var(--angle)) translateY(-50cqmin) rotate(calc(-1 * var(--angle)));
}""",
    "multichoice": """/* Multi-select dropdowns */
.multiselectdropdown-element {
  font-family: Inter, system-ui, sans-serif;
  font-size: var(--font-size);
  color: var(--text-color);
}

.multiselectdropdown-element .multiselect-toggle {
  width: 100%;
  height: 100%;
  padding: 0 8px;
  text-align: left;
  background: var(--background-color);
  color: inherit;
  border: 1px solid var(--border-color);
  border-radius: var(--border-radius);
  font: inherit;
  overflow: hidden;
  text-overflow: ellipsis;
  white-space: nowrap;
  cursor: pointer;
}

.multiselectdropdown-element .multiselect-options {
  position: absolute;
  top: 100%;
  left: 0;
  right: 0;
  z-index: 100;
  list-style: none;
  background: var(--background-color);
  border: 1px solid var(--border-color);
}

.multiselectdropdown-element .multiselect-options label {
  display: flex;
  gap: 6px;
  padding: 4px 8px;
  accent-color: var(--accent-color);
}""",
    "menu": """/* Menu buttons */
.menubutton-element .menu-toggle {
  width: 100%;
  height: 100%;
  background: var(--background-color);
  color: var(--text-color);
  border: 1px solid var(--border-color);
  border-radius: var(--border-radius);
  font: 13px Inter, system-ui, sans-serif;
  cursor: pointer;
}

.menubutton-element .menu-items {
  position: absolute;
  top: 100%;
  left: 0;
  min-width: 100%;
  z-index: 100;
  list-style: none;
  background: var(--background-color);
  border: 1px solid var(--border-color);
}

.menubutton-element .menu-items li {
  padding: 4px 10px;
  color: var(--text-color);
  font: 13px Inter, system-ui, sans-serif;
  cursor: pointer;
}

.menubutton-element .menu-items li:hover {
  background: var(--border-color);
}""",
    "text": """/* Text */
.label-element {
  display: flex;
  align-items: center;
  justify-content: var(--justify);
  font-family: var(--font-family);
  font-size: var(--font-size);
  font-weight: var(--font-weight);
  color: var(--color);
  text-align: var(--text-align);
  user-select: none;
}

.textfield-element {
  padding: var(--padding);
  background: var(--background-color);
  color: var(--text-color);
  border: var(--border-width) solid var(--border-color);
  border-radius: var(--border-radius);
  font-family: var(--font-family);
  font-size: var(--font-size);
  text-align: var(--text-align);
  outline: none;
}

.textfield-element:focus {
  border-color: var(--accent-color);
}""",
    "stepper": """/* Steppers */
.stepper-element {
  display: flex;
  align-items: stretch;
  overflow: hidden;
  background: var(--background-color);
  border: 1px solid var(--border-color);
  border-radius: var(--border-radius);
  font-family: Inter, system-ui, sans-serif;
  font-size: var(--font-size);
  color: var(--text-color);
  user-select: none;
}

.stepper-element button {
  width: 28px;
  background: transparent;
  color: inherit;
  border: none;
  font: inherit;
  cursor: pointer;
}

.stepper-element .stepper-value {
  flex: 1;
  display: flex;
  align-items: center;
  justify-content: center;
}""",
    "list": """/* Lists, trees and breadcrumbs */
.list-element {
  overflow: auto;
  font-family: Inter, system-ui, sans-serif;
  font-size: var(--font-size);
  color: var(--text-color);
  background: var(--background-color);
  user-select: none;
}

.list-element ul, .list-element ol {
  list-style: none;
}

.breadcrumb-element ol {
  display: flex;
  align-items: center;
  height: 100%;
  gap: 6px;
}

.breadcrumb-element .breadcrumb-item {
  cursor: pointer;
}

.breadcrumb-element .breadcrumb-item[aria-current="page"] {
  color: var(--accent-color);
}

.treeview-element ul[role="group"] {
  padding-left: 14px;
}

.treeview-element .tree-label {
  display: block;
  line-height: var(--row-height);
  cursor: pointer;
}

.presetbrowser-element {
  display: flex;
  flex-direction: column;
  border: 1px solid var(--border-color);
  border-radius: var(--border-radius);
}

.presetbrowser-element .preset-search {
  margin: 4px;
  padding: 2px 6px;
  background: var(--item-color);
  color: var(--text-color);
  border: 1px solid var(--border-color);
}

.presetbrowser-element .preset-list {
  flex: 1;
  overflow-y: auto;
}

.presetbrowser-element .preset-item {
  height: var(--item-height);
  line-height: var(--item-height);
  padding: 0 8px;
  background: var(--item-color);
  cursor: pointer;
}

.presetbrowser-element .preset-item.is-selected {
  background: var(--selected-color);
  color: var(--selected-text-color);
}

.presetbrowser-element .preset-folder {
  opacity: 0.6;
  margin-right: 6px;
}""",
    "meter": """/* Meters */
.meter-element {
  overflow: hidden;
  border-radius: 2px;
  background: var(--background-color);
}

.meter-element .meter-fill {
  position: absolute;
  border-radius: 2px;
  background: var(--meter-gradient);
}

.meter-element[data-orientation="vertical"] .meter-fill {
  left: 0;
  right: 0;
  bottom: 0;
  height: calc(var(--value) * 100%);
  background-size: 100% calc(100% / max(var(--value), 0.001));
  background-position: bottom;
}

.meter-element[data-orientation="horizontal"] .meter-fill {
  top: 0;
  bottom: 0;
  left: 0;
  width: calc(var(--value) * 100%);
  background-size: calc(100% / max(var(--value), 0.001)) 100%;
}

.meter-element .meter-peak {
  position: absolute;
  background: #ffffff;
}

.meter-element[data-orientation="vertical"] .meter-peak {
  left: 0;
  right: 0;
  height: 2px;
  bottom: calc(var(--peak, var(--value)) * 100%);
}

.meter-element[data-orientation="horizontal"] .meter-peak {
  top: 0;
  bottom: 0;
  width: 2px;
  left: calc(var(--peak, var(--value)) * 100%);
}

.gainreductionmeter-element[data-orientation="vertical"] .meter-fill {
  top: 0;
  bottom: auto;
}

.gainreductionmeter-element .meter-readout {
  position: absolute;
  left: 0;
  right: 0;
  bottom: 2px;
  text-align: center;
  font-size: var(--font-size);
  color: var(--text-color);
}""",
    "readout": """/* Numeric readouts */
.readout-element {
  display: flex;
  align-items: baseline;
  justify-content: center;
  gap: 4px;
  padding: var(--padding);
  background: var(--background-color);
  color: var(--text-color);
  font-family: var(--font-family);
  font-size: var(--font-size);
  user-select: none;
}

.readout-element .readout-unit {
  font-size: 0.75em;
  opacity: 0.7;
}""",
    "matrix": """/* Modulation matrix */
.matrix-element {
  overflow: hidden;
}

.matrix-element .modulation-matrix {
  width: 100%;
  height: 100%;
  border-collapse: collapse;
  table-layout: fixed;
}

.matrix-element .matrix-corner {
  background: var(--header-background);
  border: 1px solid var(--border-color);
}

.matrix-element .matrix-header, .matrix-element .matrix-row-header {
  background: var(--header-background);
  color: var(--header-color);
  font-size: var(--header-font-size);
  font-weight: 600;
  padding: 2px 4px;
  text-align: center;
  border: 1px solid var(--border-color);
  white-space: nowrap;
  overflow: hidden;
  text-overflow: ellipsis;
}

.matrix-element .matrix-row-header {
  text-align: right;
}

.matrix-element .matrix-cell {
  width: var(--cell-size);
  height: var(--cell-size);
  background: var(--cell-color);
  border: 1px solid var(--border-color);
  cursor: pointer;
  transition: background-color 0.15s ease;
}

.matrix-element .matrix-cell[data-active="true"] {
  background: var(--active-color);
}""",
    "canvas": """/* Canvas visualizations */
.canvas-element {
  overflow: hidden;
  background: var(--background-color);
  border: var(--border-width) solid var(--border-color);
}

.canvas-element .viz-canvas {
  display: block;
  width: 100%;
  height: 100%;
}""",
    "keyboard": """/* Piano keyboard */
.keyboard-element {
  user-select: none;
  touch-action: none;
}

.keyboard-element .key {
  position: absolute;
  top: 0;
  cursor: pointer;
}

.keyboard-element .key-white {
  left: calc(var(--white-index) * 100% / var(--white-keys));
  width: calc(100% / var(--white-keys));
  height: 100%;
  background: var(--white-key-color);
  border: 1px solid var(--black-key-color);
  border-radius: 0 0 3px 3px;
}

.keyboard-element .key-black {
  left: calc(var(--white-index) * 100% / var(--white-keys));
  width: calc(60% / var(--white-keys));
  height: 60%;
  z-index: 1;
  background: var(--black-key-color);
  transform: translateX(-50%);
  border-radius: 0 0 2px 2px;
}

.keyboard-element .key.is-pressed {
  background: var(--pressed-color);
}""",
    "pad": """/* Pads */
.pad-element {
  user-select: none;
}

.padgrid-element {
  display: grid;
  grid-template-columns: repeat(var(--columns), 1fr);
  grid-template-rows: repeat(var(--rows), 1fr);
  gap: var(--gap);
}

.pad-element .pad, .drumpad-element {
  background: var(--pad-color);
  color: var(--text-color);
  border: none;
  border-radius: var(--border-radius);
  font: 12px Inter, system-ui, sans-serif;
  cursor: pointer;
  transition: background-color 0.05s ease;
}

.pad-element .pad.is-active, .drumpad-element.is-active {
  background: var(--active-color);
}""",
    "grid": """/* Step sequencer */
.grid-element {
  display: grid;
  grid-template-columns: repeat(var(--steps), 1fr);
  grid-template-rows: repeat(var(--rows), 1fr);
  gap: var(--gap);
}

.grid-element .step {
  background: var(--step-color);
  border: none;
  border-radius: 2px;
  cursor: pointer;
}

.grid-element .step.is-active {
  background: var(--active-color);
}

.grid-element .step.is-playing {
  outline: 1px solid #ffffff;
}""",
    "xypad": """/* XY pad */
.xypad-element {
  cursor: crosshair;
  touch-action: none;
  background: var(--background-color);
  background-image:
    linear-gradient(var(--grid-color) 1px, transparent 1px),
    linear-gradient(90deg, var(--grid-color) 1px, transparent 1px);
  background-size: 25% 25%;
}

.xypad-element .xy-surface {
  position: absolute;
  inset: 0;
}

.xypad-element .xy-cursor {
  position: absolute;
  left: calc(var(--x) * 100%);
  bottom: calc(var(--y) * 100%);
  width: var(--cursor-size);
  height: var(--cursor-size);
  border-radius: 50%;
  background: var(--cursor-color);
  transform: translate(-50%, 50%);
  pointer-events: none;
}""",
    "loop": """/* Loop points */
.loop-element {
  background: var(--background-color);
  touch-action: none;
}

.loop-element .loop-region {
  position: absolute;
  top: 0;
  bottom: 0;
  left: calc(var(--loop-start) * 100%);
  width: calc((var(--loop-end) - var(--loop-start)) * 100%);
  background: var(--region-color);
}

.loop-element .loop-marker {
  position: absolute;
  top: 0;
  bottom: 0;
  width: 3px;
  background: var(--marker-color);
  transform: translateX(-50%);
  cursor: ew-resize;
}

.loop-element .loop-start {
  left: calc(var(--loop-start) * 100%);
}

.loop-element .loop-end {
  left: calc(var(--loop-end) * 100%);
}""",
    "harmonic": """/* Harmonic editor */
.harmonic-element {
  display: flex;
  align-items: flex-end;
  gap: 2px;
  background: var(--background-color);
  touch-action: none;
  cursor: ns-resize;
}

.harmonic-element .harmonic-bar {
  flex: 1;
  height: calc(var(--value) * 100%);
  background: var(--bar-color);
}""",
    "container": """/* Containers */
.container-element {
  display: flex;
  flex-direction: column;
  overflow: hidden;
  background: var(--background-color);
  border: var(--border-width) var(--border-style, solid) var(--border-color);
  border-radius: var(--border-radius);
}

.container-element .container-header {
  flex: none;
  height: var(--header-height, auto);
  padding: 4px 8px;
  background: var(--header-background);
  color: var(--header-color);
  font: 600 var(--header-font-size) Inter, system-ui, sans-serif;
  text-align: left;
  border: none;
}

.container-element .container-content {
  position: relative;
  flex: 1;
  padding: var(--padding);
  overflow: hidden;
}

.collapsible-element .collapsible-header {
  display: flex;
  align-items: center;
  gap: 6px;
  cursor: pointer;
}

.collapsible-element .collapsible-header[aria-expanded="false"] .collapsible-arrow {
  transform: rotate(-90deg);
}

.collapsible-element .container-content {
  flex: none;
  max-height: var(--max-content-height);
  overflow: var(--scroll-behavior);
  background: var(--content-background);
}

.collapsible-element .container-content[data-custom-scrollbar] {
  scrollbar-width: none;
}

.collapsible-element .container-content[data-custom-scrollbar]::-webkit-scrollbar {
  display: none;
}""",
    "decor": """/* Decoration */
.image-element {
  display: block;
  object-fit: var(--fit);
}

.svggraphic-element {
  opacity: var(--opacity);
}

.svggraphic-element svg {
  display: block;
  width: 100%;
  height: 100%;
}

.rectangle-element {
  background: var(--fill-color);
  opacity: var(--fill-opacity);
  border: var(--border-width) solid var(--border-color);
  border-radius: var(--border-radius);
}

.line-element {
  display: flex;
  align-items: center;
}

.line-element .line-stroke {
  width: 100%;
  border-top: var(--stroke-width) var(--stroke-style) var(--stroke-color);
}""",
}

FAMILY_ORDER = list(FAMILY_CSS)


def _kebab(name: str) -> str:
    return name.replace("_", "-")


def _css_value(name: str, value: object) -> str:
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, (int, float)):
        if name in PX_FIELDS:
            return f"{fmt_number(value)}px"
        if name in DEG_FIELDS:
            return f"{fmt_number(value)}deg"
        return fmt_number(value)
    return str(value)


def _props(el: Element, *names: str) -> List[Tuple[str, str]]:
    return [(f"--{_kebab(name)}", _css_value(name, getattr(el, name))) for name in names]


def _caption_props(el: Element) -> List[Tuple[str, str]]:
    if not (getattr(el, "show_label", False) or getattr(el, "show_value", False)):
        return []
    return _props(el, "label_color", "label_font_size", "value_color", "value_font_size")


Props = List[Tuple[str, str]]


def _rotary_props(el: E.RotaryControl) -> Props:
    props = _props(el, "track_color", "fill_color", "indicator_color", "start_angle", "end_angle")
    props.append(("--value", fmt_number(normalized(el.value, el.min, el.max))))
    if isinstance(el, E.ArcSlider):
        props += _props(el, "thumb_color")
    return props + _caption_props(el)


def _linear_props(el: E.LinearControl) -> Props:
    props = _props(el, "track_color", "fill_color", "thumb_color", "thumb_width", "thumb_height")
    props.append(("--value", fmt_number(normalized(el.value, el.min, el.max))))
    if isinstance(el, E.BipolarSlider):
        props.append(("--center", fmt_number(normalized(el.center_value, el.min, el.max))))
        props += _props(el, "center_color")
    if isinstance(el, E.NotchedSlider):
        props += _props(el, "notch_color")
    if isinstance(el, E.CrossfadeSlider):
        props += _props(el, "label_color", "label_font_size")
        return props + [p for p in _caption_props(el) if p[0] not in {"--label-color", "--label-font-size"}]
    return props + _caption_props(el)


def _range_props(el: E.RangeSlider) -> Props:
    props = _props(el, "track_color", "fill_color", "thumb_color", "thumb_width", "thumb_height")
    props.append(("--min-value", fmt_number(normalized(el.min_value, el.min, el.max))))
    props.append(("--max-value", fmt_number(normalized(el.max_value, el.min, el.max))))
    return props + _caption_props(el)


def _multislider_props(el: E.MultiSlider) -> Props:
    return _props(el, "track_color", "fill_color", "band_gap")


def _ascii_props(el: Element) -> Props:
    props = [("--font-family", font_stack(el.font_family))]
    props += _props(el, "font_size", "text_color")
    if not isinstance(el, E.AsciiSlider):
        props += _props(el, "background_color")
    if isinstance(el, E.AsciiArt):
        props += _props(el, "line_height")
    return props


def _button_props(el: E.SwitchControl) -> Props:
    props = _props(el, "background_color", "text_color", "border_color", "border_radius")
    if isinstance(el, E.IconButton):
        props += _props(el, "icon_color")
    if isinstance(el, E.ToggleSwitch):
        props += _props(el, "on_color", "off_color", "thumb_color")
    if isinstance(el, E.PowerButton):
        props += _props(el, "led_color", "led_off_color")
    return props


def _selection_props(el: E.SelectionControl) -> Props:
    return _props(el, "background_color", "text_color", "border_color", "accent_color", "border_radius", "font_size")


def _choice_props(el: Element) -> Props:
    if isinstance(el, E.RotarySwitch):
        count = len(el.positions)
        step = (el.end_angle - el.start_angle) / (count - 1) if count > 1 else 0
        angle = el.start_angle + step * min(max(el.position, 0), max(count - 1, 0))
        props = _props(el, "background_color", "text_color", "border_color", "pointer_color")
        return props + [("--pointer-angle", f"{fmt_number(angle)}deg")]
    if isinstance(el, E.SegmentButton):
        return _props(el, "background_color", "text_color", "border_color", "border_radius", "selected_color")
    props = _selection_props(el)
    if isinstance(el, E.RadioGroup):
        props += _props(el, "spacing")
    return props


def _text_props(el: Element) -> Props:
    if isinstance(el, E.Label):
        justify = {"left": "flex-start", "center": "center", "right": "flex-end"}.get(el.text_align, "center")
        return [("--font-family", font_stack(el.font_family))] + _props(
            el, "font_size", "font_weight", "color", "text_align"
        ) + [("--justify", justify)]
    assert isinstance(el, E.TextField)
    return (
        _selection_props(el)
        + [("--font-family", font_stack(el.font_family))]
        + _props(el, "text_align", "padding", "border_width")
    )


def _list_props(el: Element) -> Props:
    if isinstance(el, E.PresetBrowser):
        return _props(
            el, "background_color", "item_color", "selected_color", "text_color", "selected_text_color",
            "font_size", "item_height", "border_color", "border_radius",
        )
    props = _selection_props(el)
    if isinstance(el, E.TreeView):
        props += _props(el, "row_height")
    return props


def meter_gradient(stops: Sequence[E.ColorStop], orientation: str) -> str:
    direction = "to top" if orientation == "vertical" else "to right"
    ordered = sorted(stops, key=lambda s: s.position)
    if not ordered:
        return "#22c55e"
    parts = [f"{s.color} {fmt_number(s.position * 100)}%" for s in ordered]
    return f"linear-gradient({direction}, {', '.join(parts)})"


def _meter_props(el: Element) -> Props:
    if isinstance(el, E.Meter):
        return [
            ("--meter-gradient", meter_gradient(el.color_stops, el.orientation)),
            ("--value", fmt_number(normalized(el.value, el.min, el.max))),
        ] + _props(el, "background_color")
    assert isinstance(el, E.GainReductionMeter)
    return [
        ("--meter-gradient", el.meter_color),
        ("--value", fmt_number(normalized(el.value, 0, el.max_reduction))),
    ] + _props(el, "background_color", "font_size", "text_color")


def _readout_props(el: E.ReadoutDisplay) -> Props:
    return [("--font-family", font_stack(el.font_family))] + _props(
        el, "font_size", "text_color", "background_color", "padding"
    )


def _matrix_props(el: E.ModulationMatrix) -> Props:
    return _props(
        el, "cell_size", "cell_color", "active_color", "border_color", "header_background", "header_color", "header_font_size"
    )


def _canvas_props(el: E.CanvasDisplay) -> Props:
    return _props(el, "background_color", "border_color", "border_width")


def _keyboard_props(el: E.PianoKeyboard) -> Props:
    return _props(el, "white_key_color", "black_key_color", "pressed_color")


def _pad_props(el: Element) -> Props:
    props = _props(el, "pad_color", "active_color", "text_color", "border_radius")
    if isinstance(el, E.PadGrid):
        props += _props(el, "rows", "columns", "gap")
    return props


def _grid_props(el: E.StepSequencer) -> Props:
    return _props(el, "steps", "rows", "gap", "step_color", "active_color")


def _xypad_props(el: E.XYPad) -> Props:
    return [
        ("--x", fmt_number(normalized(el.x_value, 0, 1))),
        ("--y", fmt_number(normalized(el.y_value, 0, 1))),
    ] + _props(el, "background_color", "cursor_color", "grid_color", "cursor_size")


def _loop_props(el: E.LoopPoints) -> Props:
    return _props(el, "loop_start", "loop_end", "background_color", "region_color", "marker_color")


def _harmonic_props(el: E.HarmonicEditor) -> Props:
    return _props(el, "bar_color", "background_color")


def _container_props(el: E.ContainerElement) -> Props:
    props = _props(el, "background_color", "border_color", "border_width", "border_radius", "padding")
    if isinstance(el, E.Frame):
        props += _props(el, "border_style")
    if isinstance(el, (E.GroupBox, E.Collapsible)):
        props += _props(el, "header_font_size", "header_color", "header_background")
    if isinstance(el, E.Collapsible):
        props += _props(el, "header_height", "content_background", "max_content_height", "scroll_behavior")
    return props


def _decor_props(el: Element) -> Props:
    if isinstance(el, E.Image):
        return _props(el, "fit")
    if isinstance(el, E.SvgGraphic):
        return _props(el, "opacity")
    if isinstance(el, E.Rectangle):
        return _props(el, "fill_color", "fill_opacity", "border_color", "border_width", "border_radius")
    assert isinstance(el, E.Line)
    return _props(el, "stroke_color", "stroke_width", "stroke_style")


PropertyBuilder = Callable[[Element], Props]

PROPERTY_BUILDERS: Dict[str, PropertyBuilder] = ensure_exhaustive(
    {
        "knob": _rotary_props,
        "steppedknob": _rotary_props,
        "centerdetentknob": _rotary_props,
        "dotindicatorknob": _rotary_props,
        "arcslider": _rotary_props,
        "slider": _linear_props,
        "bipolarslider": _linear_props,
        "notchedslider": _linear_props,
        "crossfadeslider": _linear_props,
        "rangeslider": _range_props,
        "multislider": _multislider_props,
        "asciislider": _ascii_props,
        "button": _button_props,
        "iconbutton": _button_props,
        "toggleswitch": _button_props,
        "powerbutton": _button_props,
        "rockerswitch": _button_props,
        "rotaryswitch": _choice_props,
        "segmentbutton": _choice_props,
        "asciibutton": _ascii_props,
        "menubutton": _button_props,
        "dropdown": _choice_props,
        "multiselectdropdown": _selection_props,
        "combobox": _choice_props,
        "checkbox": _selection_props,
        "radiogroup": _choice_props,
        "textfield": _text_props,
        "stepper": _selection_props,
        "tabbar": _choice_props,
        "breadcrumb": _list_props,
        "treeview": _list_props,
        "label": _text_props,
        "meter": _meter_props,
        "dbdisplay": _readout_props,
        "frequencydisplay": _readout_props,
        "gainreductionmeter": _meter_props,
        "presetbrowser": _list_props,
        "modulationmatrix": _matrix_props,
        "waveform": _canvas_props,
        "oscilloscope": _canvas_props,
        "spectrumanalyzer": _canvas_props,
        "spectrogram": _canvas_props,
        "goniometer": _canvas_props,
        "vectorscope": _canvas_props,
        "scrollingwaveform": _canvas_props,
        "eqcurve": _canvas_props,
        "compressorcurve": _canvas_props,
        "envelopedisplay": _canvas_props,
        "lfodisplay": _canvas_props,
        "filterresponse": _canvas_props,
        "pianokeyboard": _keyboard_props,
        "drumpad": _pad_props,
        "padgrid": _pad_props,
        "stepsequencer": _grid_props,
        "xypad": _xypad_props,
        "looppoints": _loop_props,
        "harmoniceditor": _harmonic_props,
        "panel": _container_props,
        "frame": _container_props,
        "groupbox": _container_props,
        "collapsible": _container_props,
        "image": _decor_props,
        "svggraphic": _decor_props,
        "rectangle": _decor_props,
        "line": _decor_props,
        "asciiart": _ascii_props,
    },
    "CSS generator",
)


def element_rule(el: Element) -> str:
    declarations = [
        ("left", f"{fmt_number(el.x)}px"),
        ("top", f"{fmt_number(el.y)}px"),
        ("width", f"{fmt_number(el.width)}px"),
        ("height", f"{fmt_number(el.height)}px"),
    ]
    if el.rotation:
        declarations.append(("transform", f"rotate({fmt_number(el.rotation)}deg)"))
    if el.z_index:
        declarations.append(("z-index", str(el.z_index)))
    declarations += lookup(PROPERTY_BUILDERS, el, "CSS generator")(el)
    body = "\n".join(f"  {name}: {value};" for name, value in declarations)
    return f"#{normalize_name(el.name)} {{\n{body}\n}}"


def background_value(window: Window) -> str:
    gradient: GradientConfig | None = window.gradient
    if window.background_type == "gradient" and gradient is not None and gradient.stops:
        stops = ", ".join(f"{s.color} {fmt_number(s.position * 100)}%" for s in sorted(gradient.stops, key=lambda s: s.position))
        if gradient.type == "radial":
            return f"radial-gradient(circle, {stops})"
        return f"linear-gradient({fmt_number(gradient.angle)}deg, {stops})"
    return window.background_color


def root_rules(window: Window, responsive: bool) -> str:
    background = background_value(window)
    wrapper = (
        "#plugin-wrapper {\n"
        "  position: relative;\n"
        "  width: 100%;\n"
        "  height: 100%;\n"
        "  display: flex;\n"
        "  align-items: center;\n"
        "  justify-content: center;\n"
        "  overflow: hidden;\n"
        "}"
        if responsive
        else "#plugin-wrapper {\n  position: relative;\n  width: 100%;\n  height: 100%;\n}"
    )
    return (
        "/* Page */\n"
        "html, body {\n"
        "  width: 100%;\n"
        "  height: 100%;\n"
        "  overflow: hidden;\n"
        f"  background: {window.background_color};\n"
        "}\n\n"
        f"{wrapper}\n\n"
        "/* Container */\n"
        "#plugin-container {\n"
        "  position: relative;\n"
        f"  width: {window.width}px;\n"
        f"  height: {window.height}px;\n"
        f"  background: {background};\n"
        "  overflow: hidden;\n"
        "  flex-shrink: 0;\n"
        "  transform-origin: center center;\n"
        "}"
    )


def families_present(elements: Sequence[Element]) -> List[str]:
    present = {el.family for el in elements}
    if "range" in present:
        present.add("linear")
    return [family for family in FAMILY_ORDER if family in present]


def generate_css(elements: Sequence[Element], opts: GeneratorOptions) -> str:
    sections: List[str] = []
    if opts.fonts:
        faces = "\n\n".join(font_face_rule(font, opts.font_url_prefix) for font in opts.fonts)
        sections.append(f"/* Embedded Fonts */\n{faces}")
    sections.append(RESET_CSS)
    sections.append(root_rules(opts.window, opts.responsive_scaling))
    sections.append(BASE_ELEMENT_CSS)
    families = families_present(elements)
    sections.extend(FAMILY_CSS[family] for family in families)
    if any(getattr(el, "show_label", False) or getattr(el, "show_value", False) for el in elements):
        sections.append(CAPTION_CSS)
    ordered = render_order(elements, opts.layers)
    if ordered:
        sections.append("/* Element-specific styles */\n" + "\n\n".join(element_rule(el) for el in ordered))
    return "\n\n".join(sections) + "\n"
