"""
Export the configured map to a folder without starting the Dash app.

    python scripts/export_map.py --config config --out exports --what json html data
"""
import argparse
import logging
from pathlib import Path

from map_exporter.config.loader import load_app_state, load_export_config
from map_exporter.export.model import ExportRequest, HtmlMapMode
from map_exporter.logging_config import configure_logging
from map_exporter.services.delivery import LocalFileSink
from map_exporter.services.export_service import ExportService

logger = logging.getLogger("export_map")

WHAT = ("image", "json", "html", "data")


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--config", default="config", type=Path)
    parser.add_argument("--out", default=None, type=Path, help="defaults to export_dir from global.json")
    parser.add_argument("--what", nargs="+", choices=WHAT, default=["json", "html", "data"])
    parser.add_argument("--dataset", default=None, help="dataset id; all datasets when omitted")
    parser.add_argument("--all-rows", action="store_true", help="ignore filters for data exports")
    parser.add_argument("--mode", choices=[m.value for m in HtmlMapMode], default=None)
    parser.add_argument("--token", default=None, help="access token embedded in the HTML export")
    args = parser.parse_args()

    configure_logging(force_format="plain")

    config = load_export_config(args.config)
    state = load_app_state(config, args.config)

    out_dir = args.out or config.export_dir or (args.config / "exports")
    service = ExportService(config=config, sink=LocalFileSink(out_dir))

    request = ExportRequest(
        selected_dataset=args.dataset,
        filtered=not args.all_rows,
        user_mapbox_token=args.token,
        mode=HtmlMapMode(args.mode) if args.mode else config.html_mode,
    )

    if "image" in args.what:
        state = service.capture_preview(state)
        service.export_image(state, request)
    if "json" in args.what:
        service.export_json(state, request)
    if "html" in args.what:
        service.export_html(state, request)
    if "data" in args.what:
        service.export_data(state, request)

    for path in service.sink.delivered:
        print(f"wrote {path}")


if __name__ == "__main__":
    main()
