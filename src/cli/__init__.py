"""Command-line tools for ShowFinder.

- ``python -m src.cli.search`` -- run one or more pages of an event search
  and write the JSON response to stdout or a file.

CLI modules use argparse and build their own services via
``src.main.build_pipeline``, since they run as one-shot scripts.
"""
