# bikeflow/viz/widgets/time_slider.py
import folium

from bikeflow.traffic.time_of_day import ANY_TIME, ANY_TIME_LABEL, MINUTES_PER_DAY


def build_time_slider(filter_minute, label, *, param="t"):
    """
    Time-of-day slider overlay:
      - range -1..1439, -1 = any time
      - label updates live while dragging
      - releasing the handle reloads the page with ?t=<minute>
    """
    any_time = int(filter_minute) == ANY_TIME

    return folium.Element(
        f"""
<style>
#time-filter {{
  position: absolute;
  top: 12px;
  right: 16px;
  z-index: 1300;
  background: rgba(255,255,255,0.95);
  padding: 8px 14px;
  border-radius: 10px;
  font-family: sans-serif;
  font-size: 13px;
  box-shadow: 0 1px 4px rgba(0,0,0,0.2);
}}

#time-filter label {{
  display: flex;
  gap: 10px;
  align-items: baseline;
}}

#time-slider {{
  width: 240px;
}}

#time-display {{
  display: {'none' if any_time else 'block'};
  font-weight: 600;
}}

#any-time {{
  display: {'block' if any_time else 'none'};
  color: #666;
  font-style: italic;
}}
</style>

<div id="time-filter">
  <label>
    Filter by time:
    <input id="time-slider" type="range" min="{ANY_TIME}" max="{MINUTES_PER_DAY - 1}"
           value="{int(filter_minute)}">
  </label>
  <time id="time-display">{'' if any_time else label}</time>
  <em id="any-time">{ANY_TIME_LABEL}</em>
</div>

<script>
function formatTime(minutes) {{
  const date = new Date(0, 0, 0, 0, minutes);
  return date.toLocaleString("en-US", {{ timeStyle: "short" }});
}}

function updateTimeDisplay() {{
  const slider = document.getElementById("time-slider");
  const selected = document.getElementById("time-display");
  const anyTime = document.getElementById("any-time");
  const t = Number(slider.value);

  if (t === {ANY_TIME}) {{
    anyTime.style.display = "block";
    selected.style.display = "none";
  }} else {{
    selected.textContent = formatTime(t);
    anyTime.style.display = "none";
    selected.style.display = "block";
  }}
}}

function setTime(t) {{
  const url = new URL(window.location.href);
  url.searchParams.set("{param}", String(t));
  window.location.href = url.toString();
}}

document.addEventListener("DOMContentLoaded", () => {{
  const slider = document.getElementById("time-slider");
  if (!slider) return;

  slider.addEventListener("input", updateTimeDisplay);
  slider.addEventListener("change", () => setTime(Number(slider.value)));

  const mapEl = document.querySelector(".leaflet-container");
  const panel = document.getElementById("time-filter");
  if (mapEl && panel) mapEl.parentNode.appendChild(panel);
}});
</script>
"""
    )
