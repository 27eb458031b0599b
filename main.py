# bikeflow/main.py

from bikeflow.traffic.time_of_day import format_time_label
from bikeflow.util.stations import DEFAULT_STATIONS_URL, load_stations
from bikeflow.util.trips import DEFAULT_TRIPS_URL, load_trips
from bikeflow.viz.app.single import serve_single
from bikeflow.viz.controller import InteractionController
from bikeflow.viz.overlays.bike_lanes import load_bike_lane_layers


STATIONS = DEFAULT_STATIONS_URL
TRIPS = DEFAULT_TRIPS_URL

# morning rush
PEAK_MINUTE = 8 * 60


def print_busiest(controller, n=10):
    print(f"\nBusiest stations ({controller.label}):\n")
    for i, s in enumerate(controller.busiest(n), 1):
        print(
            f"{i:02d}. "
            f"{s['short_name']:>8} | "
            f"{s['totalTraffic']:6d} trips "
            f"({s['departures']} departures, {s['arrivals']} arrivals) "
            f"{s.get('name', '')}"
        )


def main():
    # ---- data ----
    controller = InteractionController()
    if not controller.load(
        lambda: load_stations(STATIONS),
        lambda: load_trips(TRIPS),
    ):
        print("\nNo data loaded; the map will be empty.")

    # ---- summaries ----
    if controller.ready:
        print_busiest(controller)

        controller.on_slider_input(PEAK_MINUTE)
        print_busiest(controller)

        controller.on_slider_input(-1)
        print(f"\nBack to {format_time_label(controller.filter_minute)}")

    # ---- UI ----
    serve_single(
        controller=controller,
        port=8080,
        title="Bluebikes Traffic",
        bike_lanes=load_bike_lane_layers(),
    )


if __name__ == "__main__":
    main()
