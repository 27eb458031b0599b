import os

from bikeflow.util.stations import DEFAULT_STATIONS_URL, load_stations
from bikeflow.util.trips import DEFAULT_TRIPS_URL, load_trips
from bikeflow.viz.app.single import serve_single
from bikeflow.viz.controller import InteractionController
from bikeflow.viz.overlays.bike_lanes import load_bike_lane_layers

STATIONS = os.environ.get("STATIONS_SOURCE", DEFAULT_STATIONS_URL)
TRIPS = os.environ.get("TRIPS_SOURCE", DEFAULT_TRIPS_URL)
BIKE_LANES = os.environ.get("BIKE_LANES", "0") == "1"


def build_controller():
  controller = InteractionController()
  controller.load(
      lambda: load_stations(STATIONS),
      lambda: load_trips(TRIPS),
  )
  return controller


def main():
  controller = build_controller()

  port = int(os.environ.get("PORT", "8080"))

  serve_single(
      controller=controller,
      port=port,
      title="Bluebikes Traffic",
      bike_lanes=load_bike_lane_layers() if BIKE_LANES else None,
      host=os.environ.get("HOST", "0.0.0.0"),
  )


if __name__ == "__main__":
  main()
