"""JavaScript sources assembled by ``js_generator``.

Everything here is static text. Window specific values are substituted
through ``__NAME__`` placeholders so the output stays byte-identical for
identical input.
"""

RUNTIME_HEADER = r"""// Generated by faceplate. Shared component runtime.
(function () {
  'use strict';
  if (window.Faceplate) return;

  var families = {};

  function clamp(v, lo, hi) {
    return Math.min(hi, Math.max(lo, v));
  }

  function repeat(ch, count) {
    return new Array(Math.max(count, 0) + 1).join(ch);
  }

  function polar(cx, cy, r, angle) {
    var rad = (angle - 90) * Math.PI / 180;
    return { x: cx + r * Math.cos(rad), y: cy + r * Math.sin(rad) };
  }

  function describeArc(cx, cy, r, start, end) {
    if (end - start <= 0) return '';
    if (end - start >= 360) end = start + 359.99;
    var a = polar(cx, cy, r, end);
    var b = polar(cx, cy, r, start);
    var large = end - start > 180 ? 1 : 0;
    return 'M ' + a.x.toFixed(3) + ' ' + a.y.toFixed(3) + ' A ' + r + ' ' + r + ' 0 ' + large + ' 0 ' +
      b.x.toFixed(3) + ' ' + b.y.toFixed(3);
  }

  function formatValue(norm, c) {
    var value = c.min + norm * (c.max - c.min);
    var dp = c.decimalPlaces;
    switch (c.format) {
      case 'percentage': return (norm * 100).toFixed(dp) + '%';
      case 'db': return value.toFixed(dp) + ' dB';
      case 'hz': return Math.abs(value) >= 1000 ? (value / 1000).toFixed(dp) + ' kHz' : value.toFixed(dp) + ' Hz';
      default: return value.toFixed(dp) + (c.suffix || '');
    }
  }

  function indexToValue(i, count) {
    return count > 1 ? i / (count - 1) : 0;
  }

  function valueToIndex(v, count) {
    return count > 1 ? Math.round(clamp(v, 0, 1) * (count - 1)) : 0;
  }

  function emit(el, detail) {
    el.dispatchEvent(new CustomEvent('faceplate:change', { bubbles: true, detail: detail }));
  }

  // One relay subscription fans out to every watcher of a parameter id.
  var watchers = new Map();
  var subscribed = null;

  function watch(relay, id, callback) {
    if (!relay || !id || typeof relay.onParameterChange !== 'function') return;
    if (!watchers.has(id)) watchers.set(id, []);
    watchers.get(id).push(callback);
    if (subscribed !== relay) {
      subscribed = relay;
      relay.onParameterChange(function (changedId, value) {
        if (typeof value !== 'number' || !isFinite(value)) return;
        (watchers.get(changedId) || []).forEach(function (cb) { cb(value); });
      });
    }
  }

  function channel(relay, id) {
    var live = !!(relay && id);
    return {
      id: id,
      get: function (fallback) {
        if (!live) return Promise.resolve(fallback);
        return Promise.resolve(relay.getParameter(id)).then(function (v) {
          return typeof v === 'number' && isFinite(v) ? v : fallback;
        }, function () {
          return fallback;
        });
      },
      set: function (v) { if (live) relay.setParameter(id, v); },
      begin: function () { if (live) relay.beginGesture(id); },
      end: function () { if (live) relay.endGesture(id); }
    };
  }

  function sync(relay, ch, initial, render) {
    render(initial);
    ch.get(initial).then(render);
    watch(relay, ch.id, render);
  }

  function drag(el, handlers) {
    el.addEventListener('pointerdown', function (event) {
      if (event.button !== 0) return;
      event.preventDefault();
      if (el.setPointerCapture) el.setPointerCapture(event.pointerId);
      handlers.start(event);
      function move(e) { handlers.move(e); }
      function up(e) {
        el.removeEventListener('pointermove', move);
        el.removeEventListener('pointerup', up);
        el.removeEventListener('pointercancel', up);
        if (handlers.end) handlers.end(e);
      }
      el.addEventListener('pointermove', move);
      el.addEventListener('pointerup', up);
      el.addEventListener('pointercancel', up);
    });
  }

  function arrows(el, get, set) {
    el.addEventListener('keydown', function (e) {
      var step = e.shiftKey ? 0.1 : 0.01;
      if (e.key === 'ArrowUp' || e.key === 'ArrowRight') set(get() + step);
      else if (e.key === 'ArrowDown' || e.key === 'ArrowLeft') set(get() - step);
      else return;
      e.preventDefault();
    });
  }

  function position(el, e, vertical) {
    var rect = el.getBoundingClientRect();
    if (vertical) return clamp(1 - (e.clientY - rect.top) / (rect.height || 1), 0, 1);
    return clamp((e.clientX - rect.left) / (rect.width || 1), 0, 1);
  }
"""

RUNTIME_FOOTER = r"""
  function bind(el, binding, relay) {
    var handler = families[binding.family];
    if (!handler) {
      console.warn('[Faceplate] No behaviour for element kind', binding.kind);
      return;
    }
    try {
      handler(el, binding, relay || null);
    } catch (err) {
      console.error('[Faceplate] Failed to bind #' + binding.id, err);
    }
  }

  window.Faceplate = {
    bind: bind,
    describeArc: describeArc,
    formatValue: formatValue,
    families: families
  };
})();
"""

FAMILY_SCRIPTS = {
    "rotary": r"""
  families.rotary = function (el, b, relay) {
    var c = b.config;
    var ch = channel(relay, b.parameterId);
    var fill = el.querySelector('.rotary-fill');
    var indicator = el.querySelector('.rotary-indicator');
    var thumb = el.querySelector('.rotary-thumb');
    var readout = el.querySelector('.knob-value');
    var cx = c.size / 2;
    var r = Math.max((c.size - c.trackWidth) / 2, 1);
    var value = c.value;

    function render(v) {
      value = clamp(v, 0, 1);
      if (c.steps > 1) value = Math.round(value * (c.steps - 1)) / (c.steps - 1);
      el.style.setProperty('--value', value.toFixed(4));
      el.setAttribute('aria-valuenow', (c.min + value * (c.max - c.min)).toFixed(4));
      var angle = c.startAngle + value * (c.endAngle - c.startAngle);
      if (fill) {
        if (c.detent) {
          var mid = (c.startAngle + c.endAngle) / 2;
          fill.setAttribute('d', describeArc(cx, cx, r, Math.min(mid, angle), Math.max(mid, angle)));
        } else {
          fill.setAttribute('d', value > 0.001 ? describeArc(cx, cx, r, c.startAngle, angle) : '');
        }
      }
      var dot = thumb || (indicator && indicator.tagName.toLowerCase() === 'circle' ? indicator : null);
      if (dot) {
        var p = polar(cx, cx, thumb ? r : r * 0.9, angle);
        dot.setAttribute('cx', p.x.toFixed(3));
        dot.setAttribute('cy', p.y.toFixed(3));
      } else if (indicator) {
        var a = polar(cx, cx, r * 0.4, angle);
        var z = polar(cx, cx, r * 0.9, angle);
        indicator.setAttribute('x1', a.x.toFixed(3));
        indicator.setAttribute('y1', a.y.toFixed(3));
        indicator.setAttribute('x2', z.x.toFixed(3));
        indicator.setAttribute('y2', z.y.toFixed(3));
      }
      if (readout) readout.textContent = formatValue(value, c);
    }

    function update(v) {
      if (c.detent && Math.abs(v - 0.5) < c.detentWidth) v = 0.5;
      render(v);
      ch.set(value);
    }

    var startY = 0;
    var startValue = 0;
    drag(el, {
      start: function (e) { startY = e.clientY; startValue = value; ch.begin(); },
      move: function (e) { update(startValue + (startY - e.clientY) * 0.005); },
      end: function () { ch.end(); }
    });
    el.addEventListener('dblclick', function () { update(c.defaultValue); });
    arrows(el, function () { return value; }, update);
    sync(relay, ch, value, render);
  };
""",
    "linear": r"""
  families.linear = function (el, b, relay) {
    var c = b.config;
    var ch = channel(relay, b.parameterId);
    var vertical = c.orientation === 'vertical';
    var readout = el.querySelector('.slider-value');
    var value = c.value;

    function render(v) {
      value = clamp(v, 0, 1);
      if (c.notches > 1 && c.snap) value = Math.round(value * (c.notches - 1)) / (c.notches - 1);
      el.style.setProperty('--value', value.toFixed(4));
      el.setAttribute('aria-valuenow', (c.min + value * (c.max - c.min)).toFixed(4));
      if (readout) readout.textContent = formatValue(value, c);
    }

    function update(v) {
      render(v);
      ch.set(value);
    }

    drag(el, {
      start: function (e) { ch.begin(); update(position(el, e, vertical)); },
      move: function (e) { update(position(el, e, vertical)); },
      end: function () { ch.end(); }
    });
    arrows(el, function () { return value; }, update);
    sync(relay, ch, value, render);
  };
""",
    "range": r"""
  families.range = function (el, b, relay) {
    var c = b.config;
    var vertical = c.orientation === 'vertical';
    var channels = { min: channel(relay, b.parameterId + '_min'), max: channel(relay, b.parameterId + '_max') };
    var values = { min: c.minValue, max: c.maxValue };
    var active = 'min';

    function render(which, v) {
      v = clamp(v, 0, 1);
      if (which === 'min') values.min = Math.min(v, values.max);
      else values.max = Math.max(v, values.min);
      el.style.setProperty('--min-value', values.min.toFixed(4));
      el.style.setProperty('--max-value', values.max.toFixed(4));
    }

    function update(v) {
      render(active, v);
      channels[active].set(values[active]);
    }

    drag(el, {
      start: function (e) {
        var p = position(el, e, vertical);
        active = Math.abs(p - values.min) <= Math.abs(p - values.max) ? 'min' : 'max';
        channels[active].begin();
        update(p);
      },
      move: function (e) { update(position(el, e, vertical)); },
      end: function () { channels[active].end(); }
    });
    sync(relay, channels.min, values.min, function (v) { render('min', v); });
    sync(relay, channels.max, values.max, function (v) { render('max', v); });
  };
""",
    "multislider": r"""
  families.multislider = function (el, b, relay) {
    var vertical = b.config.orientation === 'vertical';
    el.querySelectorAll('.multislider-band').forEach(function (band) {
      var ch = channel(relay, b.parameterId + '_band_' + band.getAttribute('data-index'));
      var value = parseFloat(band.style.getPropertyValue('--value')) || 0;
      function render(v) {
        value = clamp(v, 0, 1);
        band.style.setProperty('--value', value.toFixed(4));
      }
      function update(e) {
        render(position(band, e, vertical));
        ch.set(value);
      }
      drag(band, {
        start: function (e) { ch.begin(); update(e); },
        move: update,
        end: function () { ch.end(); }
      });
      sync(relay, ch, value, render);
    });
  };
""",
    "ascii": r"""
  function asciiSlider(el, b, relay) {
    var c = b.config;
    var ch = channel(relay, b.parameterId);
    var value = c.value;
    function render(v) {
      value = clamp(v, 0, 1);
      var filled = Math.round(value * c.barWidth);
      el.textContent = '[' + repeat(c.fillChar, filled) + repeat(c.emptyChar, c.barWidth - filled) + ']';
      el.setAttribute('aria-valuenow', (c.min + value * (c.max - c.min)).toFixed(4));
    }
    function update(v) {
      render(v);
      ch.set(value);
    }
    drag(el, {
      start: function (e) { ch.begin(); update(position(el, e, false)); },
      move: function (e) { update(position(el, e, false)); },
      end: function () { ch.end(); }
    });
    arrows(el, function () { return value; }, update);
    sync(relay, ch, value, render);
  }

  function asciiButton(el, b, relay) {
    var c = b.config;
    var ch = channel(relay, b.parameterId);
    var pressed = c.pressed;
    function render(v) {
      pressed = v >= 0.5;
      el.textContent = pressed ? c.pressedLabel : c.label;
      el.setAttribute('aria-pressed', pressed ? 'true' : 'false');
    }
    if (c.mode === 'momentary') {
      el.addEventListener('pointerdown', function () { ch.begin(); render(1); ch.set(1); });
      el.addEventListener('pointerup', function () { render(0); ch.set(0); ch.end(); });
    } else {
      el.addEventListener('click', function () { render(pressed ? 0 : 1); ch.set(pressed ? 1 : 0); });
    }
    sync(relay, ch, pressed ? 1 : 0, render);
  }

  function asciiNoise(el, b) {
    var c = b.config;
    function frame() {
      var lines = [];
      for (var row = 0; row < c.rows; row++) {
        var line = '';
        for (var col = 0; col < c.columns; col++) {
          line += c.characters.charAt(Math.floor(Math.random() * c.characters.length));
        }
        lines.push(line);
      }
      el.textContent = lines.join('\n');
    }
    frame();
    setInterval(frame, c.interval);
  }

  families.ascii = function (el, b, relay) {
    if (b.kind === 'asciislider') asciiSlider(el, b, relay);
    else if (b.kind === 'asciibutton') asciiButton(el, b, relay);
    else if (b.config.contentType === 'noise') asciiNoise(el, b);
  };
""",
    "switch": r"""
  families['switch'] = function (el, b, relay) {
    var c = b.config;
    var ch = channel(relay, b.parameterId);
    if (c.navigate) return;

    if (b.kind === 'checkbox') {
      var box = el.querySelector('input[type="checkbox"]');
      sync(relay, ch, c.on ? 1 : 0, function (v) { box.checked = v >= 0.5; });
      box.addEventListener('change', function () { ch.set(box.checked ? 1 : 0); });
      return;
    }

    if (b.kind === 'rockerswitch') {
      var positionValue = c.position;
      var renderRocker = function (v) {
        positionValue = Math.round(clamp(v, 0, 1) * 2);
        el.setAttribute('data-position', String(positionValue));
      };
      el.addEventListener('pointerdown', function (e) {
        var rect = el.getBoundingClientRect();
        var upper = e.clientY - rect.top < rect.height / 2;
        var next = upper ? Math.min(positionValue + 1, 2) : Math.max(positionValue - 1, 0);
        ch.begin();
        renderRocker(next / 2);
        ch.set(next / 2);
      });
      el.addEventListener('pointerup', function () {
        if (c.mode === 'spring-to-center') {
          renderRocker(0.5);
          ch.set(0.5);
        }
        ch.end();
      });
      sync(relay, ch, c.position / 2, renderRocker);
      return;
    }

    var attribute = b.kind === 'toggleswitch' ? 'aria-checked' : 'aria-pressed';
    var on = !!c.on;
    function render(v) {
      on = v >= 0.5;
      el.setAttribute(attribute, on ? 'true' : 'false');
    }
    if (c.mode === 'momentary') {
      el.addEventListener('pointerdown', function () { ch.begin(); render(1); ch.set(1); });
      el.addEventListener('pointerup', function () { render(0); ch.set(0); ch.end(); });
      el.addEventListener('pointerleave', function () { if (on) { render(0); ch.set(0); ch.end(); } });
    } else {
      el.addEventListener('click', function () {
        render(on ? 0 : 1);
        ch.set(on ? 1 : 0);
      });
    }
    sync(relay, ch, on ? 1 : 0, render);
  };
""",
    "choice": r"""
  families.choice = function (el, b, relay) {
    var c = b.config;
    var ch = channel(relay, b.parameterId);
    var count = c.count;
    var index = c.index;

    function render(i) {
      index = count > 0 ? clamp(i, 0, count - 1) : -1;
      switch (b.kind) {
        case 'rotaryswitch':
          var angle = c.startAngle + (count > 1 ? index * (c.endAngle - c.startAngle) / (count - 1) : 0);
          el.style.setProperty('--pointer-angle', angle + 'deg');
          el.setAttribute('aria-valuenow', String(index));
          break;
        case 'segmentbutton':
          el.querySelectorAll('.segment').forEach(function (s) {
            s.classList.toggle('is-selected', Number(s.getAttribute('data-index')) === index);
          });
          break;
        case 'dropdown':
          el.value = String(index);
          break;
        case 'combobox':
          el.querySelector('input').value = index >= 0 ? c.options[index] : '';
          break;
        case 'radiogroup':
          el.querySelectorAll('input[type="radio"]').forEach(function (r) { r.checked = Number(r.value) === index; });
          break;
        case 'tabbar':
          el.querySelectorAll('.tab').forEach(function (t) {
            t.setAttribute('aria-selected', Number(t.getAttribute('data-index')) === index ? 'true' : 'false');
          });
          break;
      }
    }

    function choose(i) {
      render(i);
      ch.set(indexToValue(index, count));
      emit(el, { index: index });
    }

    switch (b.kind) {
      case 'rotaryswitch':
        el.addEventListener('click', function () { choose(count ? (index + 1) % count : 0); });
        break;
      case 'dropdown':
        el.addEventListener('change', function () { choose(Number(el.value)); });
        break;
      case 'combobox':
        el.querySelector('input').addEventListener('change', function (e) {
          var i = c.options.indexOf(e.target.value);
          if (i >= 0) choose(i);
        });
        break;
      case 'radiogroup':
        el.addEventListener('change', function (e) { choose(Number(e.target.value)); });
        break;
      default:
        el.addEventListener('click', function (e) {
          var target = e.target.closest('[data-index]');
          if (target && el.contains(target)) choose(Number(target.getAttribute('data-index')));
        });
    }
    var initial = index >= 0 ? indexToValue(index, count) : 0;
    if (index < 0) render(-1);
    else sync(relay, ch, initial, function (v) { render(valueToIndex(v, count)); });
  };
""",
    "multichoice": r"""
  families.multichoice = function (el, b, relay) {
    var c = b.config;
    var toggle = el.querySelector('.multiselect-toggle');
    var list = el.querySelector('.multiselect-options');
    var boxes = el.querySelectorAll('input[type="checkbox"]');

    function summary() {
      var chosen = [];
      boxes.forEach(function (box, i) { if (box.checked) chosen.push(c.options[i]); });
      toggle.textContent = chosen.length ? chosen.join(', ') : 'Select...';
    }

    toggle.addEventListener('click', function () {
      var open = list.hasAttribute('hidden');
      if (open) list.removeAttribute('hidden'); else list.setAttribute('hidden', '');
      toggle.setAttribute('aria-expanded', open ? 'true' : 'false');
    });
    document.addEventListener('click', function (e) {
      if (!el.contains(e.target)) {
        list.setAttribute('hidden', '');
        toggle.setAttribute('aria-expanded', 'false');
      }
    });
    boxes.forEach(function (box, i) {
      var ch = channel(relay, b.parameterId + '_' + i);
      box.addEventListener('change', function () {
        var count = 0;
        boxes.forEach(function (other) { if (other.checked) count++; });
        if (box.checked && c.maxSelections > 0 && count > c.maxSelections) {
          box.checked = false;
          return;
        }
        ch.set(box.checked ? 1 : 0);
        summary();
      });
      sync(relay, ch, box.checked ? 1 : 0, function (v) {
        box.checked = v >= 0.5;
        summary();
      });
    });
  };
""",
    "menu": r"""
  families.menu = function (el) {
    var toggle = el.querySelector('.menu-toggle');
    var items = el.querySelector('.menu-items');
    function close() {
      items.setAttribute('hidden', '');
      toggle.setAttribute('aria-expanded', 'false');
    }
    toggle.addEventListener('click', function () {
      if (items.hasAttribute('hidden')) {
        items.removeAttribute('hidden');
        toggle.setAttribute('aria-expanded', 'true');
      } else {
        close();
      }
    });
    items.addEventListener('click', function (e) {
      var item = e.target.closest('[data-index]');
      if (!item) return;
      emit(el, { index: Number(item.getAttribute('data-index')), label: item.textContent });
      close();
    });
    document.addEventListener('click', function (e) { if (!el.contains(e.target)) close(); });
  };
""",
    "stepper": r"""
  families.stepper = function (el, b, relay) {
    var c = b.config;
    var ch = channel(relay, b.parameterId);
    var display = el.querySelector('.stepper-value');
    var value = c.value;
    var span = c.max - c.min;

    function render(v) {
      value = c.min + clamp(v, 0, 1) * span;
      display.textContent = value.toFixed(c.decimalPlaces);
      el.setAttribute('aria-valuenow', value.toFixed(c.decimalPlaces));
    }
    function step(direction) {
      var next = clamp(value + direction * c.step, c.min, c.max);
      var norm = span ? (next - c.min) / span : 0;
      render(norm);
      ch.set(norm);
    }
    el.querySelector('.stepper-dec').addEventListener('click', function () { step(-1); });
    el.querySelector('.stepper-inc').addEventListener('click', function () { step(1); });
    sync(relay, ch, span ? (value - c.min) / span : 0, render);
  };
""",
    "list": r"""
  families.list = function (el, b) {
    if (b.kind === 'breadcrumb') {
      el.addEventListener('click', function (e) {
        var item = e.target.closest('.breadcrumb-item');
        if (!item) return;
        el.querySelectorAll('.breadcrumb-item').forEach(function (other) { other.removeAttribute('aria-current'); });
        item.setAttribute('aria-current', 'page');
        emit(el, { index: Number(item.getAttribute('data-index')), label: item.textContent });
      });
      return;
    }
    if (b.kind === 'treeview') {
      el.addEventListener('click', function (e) {
        var label = e.target.closest('.tree-label');
        if (!label) return;
        var node = label.parentElement;
        var group = node.querySelector(':scope > ul');
        if (group) {
          var expanded = group.hasAttribute('hidden');
          if (expanded) group.removeAttribute('hidden'); else group.setAttribute('hidden', '');
          node.setAttribute('aria-expanded', expanded ? 'true' : 'false');
        } else {
          emit(el, { label: label.textContent });
        }
      });
      return;
    }
    var search = el.querySelector('.preset-search');
    var items = el.querySelectorAll('.preset-item');
    el.addEventListener('click', function (e) {
      var item = e.target.closest('.preset-item');
      if (!item) return;
      items.forEach(function (other) { other.classList.toggle('is-selected', other === item); });
      emit(el, { index: Number(item.getAttribute('data-index')), preset: b.config.presets[Number(item.getAttribute('data-index'))] });
    });
    if (search) {
      search.addEventListener('input', function () {
        var query = search.value.trim().toLowerCase();
        items.forEach(function (item) {
          var name = b.config.presets[Number(item.getAttribute('data-index'))].toLowerCase();
          if (!query || name.indexOf(query) >= 0) item.removeAttribute('hidden'); else item.setAttribute('hidden', '');
        });
      });
    }
  };
""",
    "meter": r"""
  families.meter = function (el, b, relay) {
    var c = b.config;
    var ch = channel(relay, b.parameterId);
    var readout = el.querySelector('.meter-readout');
    var peak = 0;
    sync(relay, ch, c.value, function (v) {
      var value = clamp(v, 0, 1);
      el.style.setProperty('--value', value.toFixed(4));
      if (c.peakHold) {
        peak = Math.max(peak * 0.995, value);
        el.style.setProperty('--peak', peak.toFixed(4));
      }
      if (readout) readout.textContent = (value * c.maxReduction).toFixed(1) + ' dB';
    });
  };
""",
    "readout": r"""
  families.readout = function (el, b, relay) {
    var c = b.config;
    var ch = channel(relay, b.parameterId);
    var text = el.querySelector('.readout-value');
    var unit = el.querySelector('.readout-unit');
    sync(relay, ch, c.value, function (v) {
      v = clamp(v, 0, 1);
      if (b.kind === 'frequencydisplay') {
        var hz = 20 * Math.pow(1000, v);
        var khz = c.autoKhz && hz >= 1000;
        text.textContent = (khz ? hz / 1000 : hz).toFixed(c.decimalPlaces);
        if (unit) unit.textContent = khz ? 'kHz' : 'Hz';
      } else {
        var db = c.minDb + v * (c.maxDb - c.minDb);
        text.textContent = v <= 0 ? '-inf' : db.toFixed(c.decimalPlaces);
      }
    });
  };
""",
    "matrix": r"""
  families.matrix = function (el) {
    el.addEventListener('click', function (e) {
      var cell = e.target.closest('.matrix-cell');
      if (!cell) return;
      var active = cell.getAttribute('data-active') !== 'true';
      cell.setAttribute('data-active', active ? 'true' : 'false');
      emit(el, {
        source: Number(cell.getAttribute('data-source')),
        destination: Number(cell.getAttribute('data-destination')),
        active: active
      });
    });
  };
""",
    "canvas": r"""
  function curve(ctx, w, h, fn, steps) {
    ctx.beginPath();
    for (var i = 0; i <= steps; i++) {
      var t = i / steps;
      var y = clamp(fn(t), 0, 1);
      if (i === 0) ctx.moveTo(t * w, (1 - y) * h); else ctx.lineTo(t * w, (1 - y) * h);
    }
  }

  var shapes = {
    sine: function (t) { return 0.5 + 0.4 * Math.sin(t * Math.PI * 2); },
    triangle: function (t) { return 0.1 + 0.8 * (1 - Math.abs((t * 2) % 2 - 1)); },
    saw: function (t) { return 0.1 + 0.8 * (t % 1); },
    square: function (t) { return t % 1 < 0.5 ? 0.9 : 0.1; },
    random: function (t) { return 0.1 + 0.8 * Math.abs(Math.sin(Math.floor(t * 8) * 12.9898) % 1); }
  };

  var painters = {
    wave: function (ctx, w, h, c) {
      curve(ctx, w, h, function (t) { return 0.5 + 0.35 * Math.sin(t * Math.PI * 2 * (c.cycles || 3)); }, 200);
      ctx.stroke();
    },
    spectrum: function (ctx, w, h, c) {
      curve(ctx, w, h, function (t) { return 0.8 - 0.6 * t + 0.05 * Math.sin(t * 40); }, 200);
      ctx.stroke();
      if (c.fill) {
        ctx.lineTo(w, h);
        ctx.lineTo(0, h);
        ctx.fillStyle = c.fill;
        ctx.fill();
      }
    },
    spectrogram: function (ctx, w, h, c) {
      for (var x = 0; x < w; x += 4) {
        for (var y = 0; y < h; y += 4) {
          var level = clamp(1 - y / h + 0.2 * Math.sin(x * 0.05), 0, 1);
          ctx.fillStyle = 'rgba(' + Math.round(255 * level) + ',' + Math.round(120 * level) + ',40,' + level.toFixed(2) + ')';
          ctx.fillRect(x, y, 4, 4);
        }
      }
    },
    scope: function (ctx, w, h) {
      ctx.beginPath();
      ctx.ellipse(w / 2, h / 2, w * 0.3, h * 0.15, Math.PI / 4, 0, Math.PI * 2);
      ctx.stroke();
    },
    eq: function (ctx, w, h, c) {
      var range = c.maxGain - c.minGain || 1;
      curve(ctx, w, h, function (t) {
        var octave = t * 10;
        var gain = 0;
        c.bands.forEach(function (band) {
          var center = Math.log(Math.max(band.frequency, 20) / 20) / Math.log(2);
          gain += band.gain * Math.exp(-Math.pow((octave - center) * band.q, 2));
        });
        return (gain - c.minGain) / range;
      }, 200);
      ctx.stroke();
    },
    compressor: function (ctx, w, h, c) {
      curve(ctx, w, h, function (t) {
        var input = -60 + t * 60;
        var over = input - c.threshold;
        var out = input;
        if (over > c.knee / 2) out = c.threshold + over / c.ratio;
        else if (over > -c.knee / 2 && c.knee > 0) out = input + (1 / c.ratio - 1) * Math.pow(over + c.knee / 2, 2) / (2 * c.knee);
        return (out + 60) / 60;
      }, 120);
      ctx.stroke();
    },
    envelope: function (ctx, w, h, c) {
      var total = c.attack + c.decay + 0.3 + c.release || 1;
      var points = [[0, 0], [c.attack, 1], [c.attack + c.decay, c.sustain], [c.attack + c.decay + 0.3, c.sustain], [total, 0]];
      ctx.beginPath();
      points.forEach(function (p, i) {
        var x = p[0] / total * w;
        var y = (1 - p[1] * 0.9) * h;
        if (i === 0) ctx.moveTo(x, y); else ctx.lineTo(x, y);
      });
      ctx.stroke();
    },
    lfo: function (ctx, w, h, c) {
      var shape = shapes[c.shape] || shapes.sine;
      curve(ctx, w, h, function (t) { return shape(t * c.cycles); }, 240);
      ctx.stroke();
    },
    filter: function (ctx, w, h, c) {
      var cutoff = Math.log(Math.max(c.cutoff, 20) / 20) / Math.log(1000);
      curve(ctx, w, h, function (t) {
        var d = (t - cutoff) * 6;
        var bump = c.resonance * 0.15 * Math.exp(-d * d * 4);
        switch (c.filterType) {
          case 'highpass': return (d < 0 ? 0.7 + d * 0.25 : 0.7) + bump;
          case 'bandpass': return 0.7 - Math.abs(d) * 0.25 + bump;
          case 'notch': return 0.7 - 0.6 * Math.exp(-d * d * 8);
          default: return (d > 0 ? 0.7 - d * 0.25 : 0.7) + bump;
        }
      }, 200);
      ctx.stroke();
    }
  };

  families.canvas = function (el, b) {
    var c = b.config;
    var canvas = el.querySelector('canvas');
    if (!canvas || !canvas.getContext) return;
    var ctx = canvas.getContext('2d');
    var w = canvas.width;
    var h = canvas.height;
    ctx.fillStyle = c.background;
    ctx.fillRect(0, 0, w, h);
    if (c.showGrid && c.divisions > 0) {
      ctx.strokeStyle = c.grid;
      ctx.lineWidth = 1;
      for (var i = 1; i < c.divisions; i++) {
        ctx.beginPath();
        ctx.moveTo(Math.round(w * i / c.divisions) + 0.5, 0);
        ctx.lineTo(Math.round(w * i / c.divisions) + 0.5, h);
        ctx.moveTo(0, Math.round(h * i / c.divisions) + 0.5);
        ctx.lineTo(w, Math.round(h * i / c.divisions) + 0.5);
        ctx.stroke();
      }
    }
    ctx.strokeStyle = c.trace;
    ctx.lineWidth = 1.5;
    (painters[c.painter] || painters.wave)(ctx, w, h, c);
  };
""",
    "keyboard": r"""
  families.keyboard = function (el, b, relay) {
    var ch = channel(relay, b.parameterId);
    function press(key, down) {
      key.classList.toggle('is-pressed', down);
      var note = Number(key.getAttribute('data-note'));
      if (down) ch.set(note / 127);
      emit(el, { note: note, pressed: down });
    }
    el.querySelectorAll('.key').forEach(function (key) {
      key.addEventListener('pointerdown', function (e) { e.preventDefault(); press(key, true); });
      key.addEventListener('pointerup', function () { press(key, false); });
      key.addEventListener('pointerleave', function () { if (key.classList.contains('is-pressed')) press(key, false); });
    });
  };
""",
    "pad": r"""
  families.pad = function (el, b, relay) {
    var pads = b.kind === 'drumpad' ? [el] : Array.prototype.slice.call(el.querySelectorAll('.pad'));
    pads.forEach(function (pad) {
      var suffix = pad === el ? '' : '_' + pad.getAttribute('data-index');
      var ch = channel(relay, b.parameterId + suffix);
      function hit(down) {
        pad.classList.toggle('is-active', down);
        ch.set(down ? 1 : 0);
      }
      pad.addEventListener('pointerdown', function () { ch.begin(); hit(true); });
      pad.addEventListener('pointerup', function () { hit(false); ch.end(); });
      pad.addEventListener('pointerleave', function () { if (pad.classList.contains('is-active')) { hit(false); ch.end(); } });
    });
  };
""",
    "grid": r"""
  families.grid = function (el, b, relay) {
    el.querySelectorAll('.step').forEach(function (step) {
      var ch = channel(relay, b.parameterId + '_' + step.getAttribute('data-index'));
      function render(v) {
        var active = v >= 0.5;
        step.classList.toggle('is-active', active);
        step.setAttribute('aria-pressed', active ? 'true' : 'false');
      }
      step.addEventListener('click', function () {
        var active = !step.classList.contains('is-active');
        render(active ? 1 : 0);
        ch.set(active ? 1 : 0);
      });
      sync(relay, ch, step.classList.contains('is-active') ? 1 : 0, render);
    });
  };
""",
    "xypad": r"""
  families.xypad = function (el, b, relay) {
    var c = b.config;
    var chX = channel(relay, c.xParameterId);
    var chY = channel(relay, c.yParameterId);
    var surface = el.querySelector('.xy-surface') || el;
    function renderX(v) { el.style.setProperty('--x', clamp(v, 0, 1).toFixed(4)); }
    function renderY(v) { el.style.setProperty('--y', clamp(v, 0, 1).toFixed(4)); }
    function update(e) {
      var x = position(surface, e, false);
      var y = position(surface, e, true);
      renderX(x);
      renderY(y);
      chX.set(x);
      chY.set(y);
    }
    drag(surface, {
      start: function (e) { chX.begin(); chY.begin(); update(e); },
      move: update,
      end: function () { chX.end(); chY.end(); }
    });
    sync(relay, chX, c.x, renderX);
    sync(relay, chY, c.y, renderY);
  };
""",
    "loop": r"""
  families.loop = function (el, b, relay) {
    var c = b.config;
    var channels = { start: channel(relay, b.parameterId + '_start'), end: channel(relay, b.parameterId + '_end') };
    var values = { start: c.start, end: c.end };
    var active = 'start';
    function render(which, v) {
      v = clamp(v, 0, 1);
      if (which === 'start') values.start = Math.min(v, values.end);
      else values.end = Math.max(v, values.start);
      el.style.setProperty('--loop-start', values.start.toFixed(4));
      el.style.setProperty('--loop-end', values.end.toFixed(4));
    }
    function update(e) {
      render(active, position(el, e, false));
      channels[active].set(values[active]);
    }
    drag(el, {
      start: function (e) {
        var p = position(el, e, false);
        active = Math.abs(p - values.start) <= Math.abs(p - values.end) ? 'start' : 'end';
        channels[active].begin();
        update(e);
      },
      move: update,
      end: function () { channels[active].end(); }
    });
    sync(relay, channels.start, values.start, function (v) { render('start', v); });
    sync(relay, channels.end, values.end, function (v) { render('end', v); });
  };
""",
    "harmonic": r"""
  families.harmonic = function (el, b, relay) {
    var bars = Array.prototype.slice.call(el.querySelectorAll('.harmonic-bar'));
    var channels = bars.map(function (bar) {
      var ch = channel(relay, b.parameterId + '_' + bar.getAttribute('data-index'));
      sync(relay, ch, parseFloat(bar.style.getPropertyValue('--value')) || 0, function (v) {
        bar.style.setProperty('--value', clamp(v, 0, 1).toFixed(4));
      });
      return ch;
    });
    function update(e) {
      var rect = el.getBoundingClientRect();
      var i = Math.floor(clamp((e.clientX - rect.left) / (rect.width || 1), 0, 0.9999) * bars.length);
      var v = position(el, e, true);
      bars[i].style.setProperty('--value', v.toFixed(4));
      channels[i].set(v);
    }
    drag(el, { start: update, move: update });
  };
""",
    "container": r"""
  families.container = function (el) {
    var header = el.querySelector(':scope > .collapsible-header');
    var content = el.querySelector(':scope > .container-content');
    if (!header || !content) return;
    header.addEventListener('click', function () {
      var expand = content.hasAttribute('hidden');
      if (expand) content.removeAttribute('hidden'); else content.setAttribute('hidden', '');
      header.setAttribute('aria-expanded', expand ? 'true' : 'false');
      emit(el, { collapsed: !expand });
    });
  };
""",
}

FAMILY_ORDER = list(FAMILY_SCRIPTS)

BINDINGS_TEMPLATE = r"""// Generated by faceplate. Parameter bindings for window "__WINDOW_NAME__".
// Talks to the host exclusively through window.__relay__.
(function () {
  'use strict';
  var ROOT_SELECTOR = __ROOT_SELECTOR__;
  var BINDINGS = __BINDINGS__;
  var NAVIGATION = __NAVIGATION__;

  function navigate(windowId) {
    var target = NAVIGATION[windowId];
    if (!target) {
      console.warn('[Faceplate] No exported window with id', windowId);
      return;
    }
    window.location.href = target.href;
  }

  function start() {
    var root = document.querySelector(ROOT_SELECTOR);
    if (!root) {
      console.error('[Faceplate] Root element not found:', ROOT_SELECTOR);
      return;
    }
    var relay = window.__relay__ || null;
    if (!relay) console.warn('[Faceplate] window.__relay__ is missing; controls run locally');
    BINDINGS.forEach(function (binding) {
      var el = root.querySelector('#' + binding.id);
      if (el && window.Faceplate) window.Faceplate.bind(el, binding, relay);
    });
    root.querySelectorAll('[data-navigate-window]').forEach(function (el) {
      el.addEventListener('click', function (event) {
        event.preventDefault();
        navigate(el.getAttribute('data-navigate-window'));
      });
    });
  }

  if (document.readyState === 'loading') document.addEventListener('DOMContentLoaded', start);
  else start();
})();
"""

MOCK_RELAY = r"""// Mock relay for running the UI outside a plugin host.
// Do not ship this to a host: the host installs the real window.__relay__.
(function () {
  'use strict';
  if (window.__relay__) return;
  var values = new Map();
  var listeners = [];

  function notify(id, value) {
    listeners.slice().forEach(function (callback) {
      try {
        callback(id, value);
      } catch (err) {
        console.error('[MockRelay] Listener failed', err);
      }
    });
  }

  window.__relay__ = {
    getParameter: function (id) {
      var value = values.has(id) ? values.get(id) : null;
      console.log('[MockRelay] getParameter(' + id + ') -> ' + value);
      return Promise.resolve(value);
    },
    setParameter: function (id, value) {
      values.set(id, value);
      console.log('[MockRelay] setParameter(' + id + ', ' + value + ')');
      setTimeout(function () { notify(id, value); }, 0);
    },
    beginGesture: function (id) {
      console.log('[MockRelay] beginGesture(' + id + ')');
    },
    endGesture: function (id) {
      console.log('[MockRelay] endGesture(' + id + ')');
    },
    onParameterChange: function (callback) {
      listeners.push(callback);
      return function () {
        var index = listeners.indexOf(callback);
        if (index >= 0) listeners.splice(index, 1);
      };
    }
  };
  console.log('[MockRelay] Installed (preview mode)');
})();
"""

RESPONSIVE_SCALE_TEMPLATE = r"""// Responsive scaling: fit the authored canvas into the host view.
(function () {
  'use strict';
  var CANVAS_WIDTH = __WIDTH__;
  var CANVAS_HEIGHT = __HEIGHT__;
  var MIN_SCALE = __MIN_SCALE__;
  var MAX_SCALE = __MAX_SCALE__;
  var WRAPPER_SELECTOR = __WRAPPER_SELECTOR__;
  var CONTAINER_SELECTOR = __CONTAINER_SELECTOR__;

  function updateScale() {
    var wrapper = document.querySelector(WRAPPER_SELECTOR);
    var container = document.querySelector(CONTAINER_SELECTOR);
    if (!wrapper || !container || !wrapper.clientWidth || !wrapper.clientHeight) return;
    var scale = Math.min(wrapper.clientWidth / CANVAS_WIDTH, wrapper.clientHeight / CANVAS_HEIGHT);
    scale = Math.max(MIN_SCALE, Math.min(MAX_SCALE, scale));
    container.style.transform = 'scale(' + scale + ')';
  }

  window.addEventListener('resize', updateScale);
  window.addEventListener('load', updateScale);
  updateScale();
})();
"""

CUSTOM_SCROLLBAR = r"""// Custom scrollbars for scrollable containers.
// Embedded web views do not reliably draw native scrollbars.
(function () {
  'use strict';

  function createScrollbar(scroller, config, vertical) {
    var width = config.width || 10;
    var thumbColor = config.thumbColor || '#4a4a4a';
    var trackColor = config.trackColor || '#1a1a1a';
    var bar = document.createElement('div');
    bar.className = 'fp-scrollbar fp-scrollbar-' + (vertical ? 'vertical' : 'horizontal');
    bar.style.cssText = vertical
      ? 'position:absolute;right:0;top:0;bottom:0;width:' + width + 'px;background:' + trackColor + ';z-index:10;'
      : 'position:absolute;left:0;right:0;bottom:0;height:' + width + 'px;background:' + trackColor + ';z-index:10;';
    var thumb = document.createElement('div');
    thumb.style.cssText = 'position:absolute;background:' + thumbColor + ';border-radius:' + (width / 2) + 'px;cursor:grab;' +
      (vertical ? 'left:2px;right:2px;' : 'top:2px;bottom:2px;');
    bar.appendChild(thumb);

    var thumbSize = 0;
    function update() {
      var client = vertical ? scroller.clientHeight : scroller.clientWidth;
      var total = vertical ? scroller.scrollHeight : scroller.scrollWidth;
      var offset = vertical ? scroller.scrollTop : scroller.scrollLeft;
      var track = vertical ? bar.clientHeight : bar.clientWidth;
      if (total <= client + 1) {
        bar.style.display = 'none';
        return;
      }
      bar.style.display = 'block';
      thumbSize = Math.max(24, track * client / total);
      var travel = track - thumbSize;
      var pos = total > client ? offset / (total - client) * travel : 0;
      thumb.style[vertical ? 'height' : 'width'] = thumbSize + 'px';
      thumb.style[vertical ? 'top' : 'left'] = pos + 'px';
    }

    thumb.addEventListener('pointerdown', function (e) {
      e.preventDefault();
      e.stopPropagation();
      var start = vertical ? e.clientY : e.clientX;
      var startScroll = vertical ? scroller.scrollTop : scroller.scrollLeft;
      thumb.setPointerCapture(e.pointerId);
      function move(ev) {
        var client = vertical ? scroller.clientHeight : scroller.clientWidth;
        var total = vertical ? scroller.scrollHeight : scroller.scrollWidth;
        var track = vertical ? bar.clientHeight : bar.clientWidth;
        var ratio = (total - client) / Math.max(track - thumbSize, 1);
        var delta = ((vertical ? ev.clientY : ev.clientX) - start) * ratio;
        if (vertical) scroller.scrollTop = startScroll + delta; else scroller.scrollLeft = startScroll + delta;
      }
      function up() {
        thumb.removeEventListener('pointermove', move);
        thumb.removeEventListener('pointerup', up);
      }
      thumb.addEventListener('pointermove', move);
      thumb.addEventListener('pointerup', up);
    });

    bar.addEventListener('click', function (e) {
      if (e.target === thumb) return;
      var rect = bar.getBoundingClientRect();
      var ratio = vertical ? (e.clientY - rect.top) / rect.height : (e.clientX - rect.left) / rect.width;
      if (vertical) scroller.scrollTop = ratio * (scroller.scrollHeight - scroller.clientHeight);
      else scroller.scrollLeft = ratio * (scroller.scrollWidth - scroller.clientWidth);
    });

    return { element: bar, update: update };
  }

  function init(scroller) {
    var config;
    try {
      config = JSON.parse(scroller.getAttribute('data-custom-scrollbar') || '{}');
    } catch (err) {
      console.warn('[Scrollbar] Invalid configuration on', scroller, err);
      return;
    }
    var host = scroller.parentElement;
    host.style.position = 'relative';
    var bars = [createScrollbar(scroller, config, true), createScrollbar(scroller, config, false)];
    bars.forEach(function (bar) { host.appendChild(bar.element); });
    function updateAll() { bars.forEach(function (bar) { bar.update(); }); }
    scroller.addEventListener('scroll', updateAll);
    if (window.ResizeObserver) new ResizeObserver(updateAll).observe(scroller);
    new MutationObserver(updateAll).observe(scroller, { childList: true, subtree: true, attributes: true });
    updateAll();
  }

  function initAll() {
    document.querySelectorAll('[data-custom-scrollbar]').forEach(init);
  }

  if (document.readyState === 'loading') document.addEventListener('DOMContentLoaded', initAll);
  else initAll();
})();
"""

PREVIEW_NAVIGATION = r"""// Preview navigation: window tabs and cross-window triggers.
(function () {
  'use strict';
  var tabs = document.querySelectorAll('.fp-window-tab');

  function show(windowId) {
    var found = false;
    document.querySelectorAll('.fp-window').forEach(function (section) {
      if (section.getAttribute('data-window-id') === windowId) found = true;
    });
    if (!found) return false;
    document.querySelectorAll('.fp-window').forEach(function (section) {
      if (section.getAttribute('data-window-id') === windowId) section.removeAttribute('hidden');
      else section.setAttribute('hidden', '');
    });
    tabs.forEach(function (tab) {
      tab.classList.toggle('is-active', tab.getAttribute('data-window-id') === windowId);
    });
    window.dispatchEvent(new Event('resize'));
    return true;
  }

  tabs.forEach(function (tab) {
    tab.addEventListener('click', function () { show(tab.getAttribute('data-window-id')); });
  });

  // Capture phase, so the per-window bindings never see these clicks.
  document.addEventListener('click', function (event) {
    var trigger = event.target.closest ? event.target.closest('[data-navigate-window]') : null;
    if (!trigger) return;
    event.preventDefault();
    event.stopPropagation();
    var target = trigger.getAttribute('data-navigate-window');
    if (!show(target)) console.warn('[Preview] No window with id', target);
  }, true);
})();
"""
