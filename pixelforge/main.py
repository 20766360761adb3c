# Command-line entry point
import argparse
import sys

from pixelforge.config import settings
from pixelforge.io.storage import JsonKeyValueStore
from pixelforge.processing.adjustments import AdjustmentState
from pixelforge.processing.batch import render_batch
from pixelforge.processing.color_matrix import as_affine, compose
from pixelforge.processing.filters import (
    FILTER_CATEGORIES,
    FILTERS,
    get_filter,
    get_filters_by_category,
    search_filters,
)
from pixelforge.processing.renderer import OutputOptions
from pixelforge.processing.user_presets import UserPresetStore
from pixelforge.utils.errors import AppError, PresetError, format_user_error
from pixelforge.utils.logger import LOG_LEVEL_MAP, get_logger, set_log_level

logger = get_logger(__name__)


def _add_adjustment_args(parser):
    for name, default in settings.ADJUSTMENT_DEFAULTS.items():
        low, high = settings.ADJUSTMENT_RANGES[name]
        parser.add_argument(
            f"--{name}", type=float, default=default,
            help=f"{name} (slider range {low:g} to {high:g}, default {default:g})",
        )
    parser.add_argument("--filter", dest="filter_id", default=None, help="Filter preset id (see 'filters')")


def _adjustments_from_args(args):
    return AdjustmentState(**{name: getattr(args, name) for name in settings.ADJUSTMENT_DEFAULTS})


def _filter_from_args(args):
    if args.filter_id is None:
        return None
    filter_preset = get_filter(args.filter_id)
    if filter_preset is None:
        raise PresetError(f"Unknown filter '{args.filter_id}'", user_message=f"Unknown filter '{args.filter_id}'")
    return filter_preset


def build_parser():
    parser = argparse.ArgumentParser(prog="pixelforge", description="Color adjustments and filters for photos.")
    parser.add_argument("--log-level", default=None, choices=list(LOG_LEVEL_MAP), help="Override settings.LOGGING_LEVEL")
    subparsers = parser.add_subparsers(dest="command", required=True)

    render_parser = subparsers.add_parser("render", help="Render images with adjustments and a filter")
    render_parser.add_argument("sources", nargs="+", help="Input image files")
    _add_adjustment_args(render_parser)
    render_parser.add_argument("--format", default=settings.RENDER_DEFAULTS["format"], help="JPEG, PNG or WEBP")
    render_parser.add_argument("--quality", type=int, default=settings.RENDER_DEFAULTS["quality"])
    render_parser.add_argument("--output-dir", default=None, help="Defaults to the user cache directory")
    render_parser.add_argument("--workers", type=int, default=settings.BATCH_MAX_WORKERS)

    filters_parser = subparsers.add_parser("filters", help="List filter presets")
    filters_parser.add_argument("--category", default=None, choices=FILTER_CATEGORIES)
    filters_parser.add_argument("--search", default=None)

    matrix_parser = subparsers.add_parser("matrix", help="Print the composed 4x5 color matrix")
    _add_adjustment_args(matrix_parser)

    presets_parser = subparsers.add_parser("presets", help="Manage saved user presets")
    presets_parser.add_argument("--store", default=None, help="Store file (defaults to the user data directory)")
    presets_sub = presets_parser.add_subparsers(dest="presets_command", required=True)
    presets_sub.add_parser("list", help="List saved presets")
    save_parser = presets_sub.add_parser("save", help="Save adjustments and a filter as a preset")
    save_parser.add_argument("name")
    _add_adjustment_args(save_parser)
    export_parser = presets_sub.add_parser("export", help="Print a preset's share payload")
    export_parser.add_argument("name")
    import_parser = presets_sub.add_parser("import", help="Import a preset from a share payload")
    import_parser.add_argument("payload")

    return parser


def _run_render(args):
    options = OutputOptions(
        format=args.format,
        quality=args.quality,
        persist=True,
        output_dir=args.output_dir,
    )
    outcomes = render_batch(
        args.sources,
        _adjustments_from_args(args),
        _filter_from_args(args),
        options,
        max_workers=args.workers,
    )
    failed = 0
    for outcome in outcomes:
        if outcome.success:
            print(outcome.result.path)
        else:
            failed += 1
            print(f"{outcome.source}: {format_user_error(outcome.error)}", file=sys.stderr)
    return 1 if failed else 0


def _run_filters(args):
    if args.search:
        selected = search_filters(args.search)
    elif args.category:
        selected = get_filters_by_category(args.category)
    else:
        selected = list(FILTERS)
    for f in selected:
        print(f"{f.id}\t{f.name}\t{f.category}")
    return 0


def _run_matrix(args):
    matrix = as_affine(compose(_adjustments_from_args(args), _filter_from_args(args)))
    for row in matrix:
        print(" ".join(f"{value: .6f}" for value in row))
    return 0


def _run_presets(args):
    store = UserPresetStore(JsonKeyValueStore(args.store))
    if args.presets_command == "list":
        for preset in store.list_presets():
            filter_name = preset.filter.name if preset.filter else "-"
            print(f"{preset.name}\t{filter_name}")
    elif args.presets_command == "save":
        store.save_preset(args.name, _adjustments_from_args(args), _filter_from_args(args))
        print(f"Saved preset '{args.name}'")
    elif args.presets_command == "export":
        preset = store.find(args.name)
        if preset is None:
            raise PresetError(f"No preset named '{args.name}'", user_message=f"No preset named '{args.name}'")
        print(store.export_preset(preset))
    elif args.presets_command == "import":
        preset = store.import_preset(args.payload)
        print(f"Imported preset '{preset.name}'")
    return 0


COMMANDS = {
    "render": _run_render,
    "filters": _run_filters,
    "matrix": _run_matrix,
    "presets": _run_presets,
}


def main(argv=None):
    """Main function to run the command-line tool."""
    args = build_parser().parse_args(argv)
    if args.log_level:
        set_log_level(args.log_level)
    try:
        return COMMANDS[args.command](args)
    except AppError as e:
        logger.debug("Command %s failed: %s", args.command, e)
        print(format_user_error(e), file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
