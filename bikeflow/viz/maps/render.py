# bikeflow/viz/maps/render.py
import folium

from bikeflow.traffic.time_of_day import ANY_TIME
from bikeflow.viz.overlays.bike_lanes import add_bike_lane_layers
from bikeflow.viz.overlays.stations import add_station_markers
from bikeflow.viz.widgets.legend import build_legend_widget
from bikeflow.viz.widgets.time_slider import build_time_slider

CENTER_LAT = 42.36027
CENTER_LON = -71.09415
DEFAULT_ZOOM = 12
MIN_ZOOM = 5
MAX_ZOOM = 18


def build_map(*, bike_lanes=None):
    m = folium.Map(
        location=[CENTER_LAT, CENTER_LON],
        zoom_start=DEFAULT_ZOOM,
        min_zoom=MIN_ZOOM,
        max_zoom=MAX_ZOOM,
        tiles="cartodbpositron",
        prefer_canvas=False,
    )

    if bike_lanes:
        add_bike_lane_layers(m, bike_lanes)

    return m


def render_map_document(
    *,
    markers,
    filter_minute: int = ANY_TIME,
    label: str = "",
    title: str | None = None,
    bike_lanes=None,
):
    """
    Single place that assembles the full Folium map HTML document.

    bike_lanes: {layer name: geojson dict} from load_bike_lane_layers,
    loaded once by the caller; None for no overlays.
    """
    m = build_map(bike_lanes=bike_lanes)

    # stations
    add_station_markers(m, markers)

    # widgets
    m.get_root().html.add_child(build_time_slider(filter_minute, label))
    m.get_root().html.add_child(
        build_legend_widget(filter_active=int(filter_minute) != ANY_TIME)
    )

    # title
    m.get_root().html.add_child(
        folium.Element(
            f"""
<style>
#map-title {{
  position: absolute;
  top: 12px;
  left: 50%;
  transform: translateX(-50%);
  background: rgba(255,255,255,0.95);
  padding: 6px 16px;
  border-radius: 999px;
  font-size: 14px;
  font-weight: 600;
  z-index: 1300;
}}
</style>

<script>
document.addEventListener("DOMContentLoaded", () => {{
  const mapEl = document.querySelector(".leaflet-container");
  if (!mapEl) return;

  const existingTitle = document.getElementById("map-title");
  if (existingTitle) existingTitle.remove();

  {"const t=document.createElement('div');t.id='map-title';t.textContent=%r;mapEl.parentNode.appendChild(t);" % title if title else ""}
}});
</script>
"""
        )
    )

    return m.get_root().render()
