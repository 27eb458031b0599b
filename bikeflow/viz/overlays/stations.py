import folium


def add_station_markers(m, markers):
    """
    Draw one circle per bound Marker.
    Radius is in screen pixels (CircleMarker), fill comes from the flow bucket.
    """
    for mk in markers:
        popup = [
            f"<b>{mk.name or mk.short_name}</b>",
            f"Station: {mk.short_name}",
            mk.tooltip,
        ]

        folium.CircleMarker(
            location=[mk.lat, mk.lon],
            radius=mk.radius,
            color=mk.stroke,
            weight=mk.stroke_width,
            fill=True,
            fill_color=mk.fill,
            fill_opacity=mk.opacity,
            opacity=mk.opacity,
            tooltip=mk.tooltip,
            popup="<br>".join(popup),
        ).add_to(m)
