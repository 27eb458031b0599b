# bikeflow/viz/widgets/legend.py
import folium

from bikeflow.viz.scales import FLOW_COLORS


def build_legend_widget(*, filter_active: bool = False):
    """
    Returns a Folium Element that injects a floating legend.
    """
    size_note = (
        "size: trips within an hour of the selected time"
        if filter_active
        else "size: all trips"
    )

    return folium.Element(
        f"""
<style>
#map-legend {{
  position: absolute;
  bottom: 24px;
  left: 16px;
  background: rgba(255,255,255,0.95);
  padding: 8px 12px;
  border-radius: 10px;
  font-size: 12px;
  z-index: 1200;
}}
</style>

<script>
document.addEventListener("DOMContentLoaded", () => {{
  const mapEl = document.querySelector(".leaflet-container");
  if (!mapEl) return;

  const existing = document.getElementById("map-legend");
  if (existing) existing.remove();

  const legend = document.createElement("div");
  legend.id = "map-legend";
  legend.innerHTML = `
    <div><span style="color:{FLOW_COLORS[1.0]}">●</span> more departures</div>
    <div><span style="color:{FLOW_COLORS[0.5]}">●</span> balanced</div>
    <div><span style="color:{FLOW_COLORS[0.0]}">●</span> more arrivals</div>
    <hr style="margin:6px 0">
    <div>{size_note}</div>
  `;
  mapEl.parentNode.appendChild(legend);
}});
</script>
"""
    )
