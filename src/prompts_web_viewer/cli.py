"""Command line entry point."""

import argparse
import logging
import sys
from pathlib import Path

from prompts_web_viewer.config import ViewerConfig
from prompts_web_viewer.errors import SnapshotError
from prompts_web_viewer.knowledge_base import KnowledgeBase, LiveKnowledgeBase, SnapshotKnowledgeBase
from prompts_web_viewer.server import create_app
from prompts_web_viewer.snapshot import StaticSnapshotBuilder
from prompts_web_viewer.walker import TraversalPolicy
from prompts_web_viewer.watcher import ChangeWatcher

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for ``prompts-viewer``."""
    parser = argparse.ArgumentParser(
        prog="prompts-viewer",
        description="Browse and search a folder of markdown prompts.",
    )
    parser.add_argument("--root", type=Path, help="Corpus root directory (default: $PROMPTS_VIEWER_ROOT or .)")
    parser.add_argument("--log-level", help="Logging level (default: INFO)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Serve the knowledge base over HTTP")
    serve.add_argument("--host", help="Bind address")
    serve.add_argument("--port", type=int, help="Port to listen on (default: 3001)")
    serve.add_argument("--snapshot", type=Path, help="Serve a built snapshot instead of live files")
    serve.add_argument("--static-dir", type=Path, help="Directory holding the front-end files")
    serve.add_argument("--no-watch", action="store_true", help="Disable change watching")

    build = subparsers.add_parser("build", help="Write a static snapshot")
    build.add_argument("output", type=Path, help="Output directory")
    build.add_argument(
        "--policy",
        choices=[policy.value for policy in TraversalPolicy],
        default=TraversalPolicy.LIVE.value,
        help="Directory traversal policy (default: live)",
    )
    build.add_argument("--assets", type=Path, help="Front-end files to copy into the snapshot")

    search = subparsers.add_parser("search", help="Search the knowledge base")
    search.add_argument("query", help="Text to search for")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the command line interface.

    Args:
        argv: Arguments to parse instead of ``sys.argv``.

    Returns:
        Process exit status.
    """
    args = build_parser().parse_args(argv)
    try:
        config = ViewerConfig.from_env()
    except ValueError as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return 1

    if args.root is not None:
        config.root = args.root
    if args.log_level:
        config.log_level = args.log_level.upper()

    logging.basicConfig(level=config.log_level, format="%(asctime)s - %(levelname)s - %(name)s - %(message)s")

    try:
        if args.command == "serve":
            return _serve(args, config)
        if args.command == "build":
            return _build(args, config)
        return _search(args, config)
    except (ValueError, SnapshotError) as exc:
        logger.error("Failed to start: %s", exc)
        return 1


def _serve(args: argparse.Namespace, config: ViewerConfig) -> int:
    if args.host:
        config.host = args.host
    if args.port is not None:
        config.port = args.port
    if args.static_dir is not None:
        config.static_dir = args.static_dir

    watcher = None
    knowledge_base: KnowledgeBase
    if args.snapshot is not None:
        knowledge_base = SnapshotKnowledgeBase(args.snapshot)
    else:
        live = LiveKnowledgeBase(config.root, exclude_names=config.exclude_names)
        if config.watch and not args.no_watch:
            watcher = ChangeWatcher(live.walker.clone(), live.handle_change, config.poll_interval)
            watcher.start()
        knowledge_base = live

    app = create_app(knowledge_base, config.static_dir)
    logger.info("Prompts web viewer running at http://%s:%d", config.host, config.port)
    try:
        app.run(host=config.host, port=config.port, threaded=False)
    finally:
        if watcher is not None:
            watcher.stop()
    return 0


def _build(args: argparse.Namespace, config: ViewerConfig) -> int:
    output = args.output
    knowledge_base = LiveKnowledgeBase(
        config.root,
        policy=TraversalPolicy(args.policy),
        exclude_names=config.exclude_names,
        exclude_paths=[output],
    )
    summary = StaticSnapshotBuilder(knowledge_base).build(output, assets_dir=args.assets)
    print(f"Wrote {summary.document_count} records to {summary.output_dir}")
    if summary.failures:
        print(f"Failed to generate {len(summary.failures)} records", file=sys.stderr)
        return 1
    return 0


def _search(args: argparse.Namespace, config: ViewerConfig) -> int:
    knowledge_base = LiveKnowledgeBase(config.root, exclude_names=config.exclude_names)
    results = knowledge_base.search(args.query)
    if not results:
        print("No results found")
        return 0
    for result in results:
        print(f"{result.file.title} ({result.file.path})")
        for match in result.matches:
            print(f"  {match.line}: {match.content}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
