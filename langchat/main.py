"""
Module: main.py

Entry point for LangChat. Sets up logging, then either runs the bootstrap
sequence headless on asyncio or opens the Qt root window with the
services running on a background event loop.

Functions:
    main: Parses the command line and runs the selected mode.
"""

import argparse
import asyncio
import logging
import os
import signal
import sys

from langchat.config import APP_NAME, APP_VERSION
from langchat.utils.logging.logger_setup import ConfigureLogger

logger = logging.getLogger(__name__)


def get_user_config_dir(app_name: str = APP_NAME) -> str:
    """Get user configuration directory based on OS."""
    if os.name == "nt":
        base_dir = os.environ.get("APPDATA", os.path.expanduser("~"))
    else:
        base_dir = os.environ.get("XDG_CONFIG_HOME", os.path.expanduser("~/.config"))
    return os.path.join(base_dir, app_name)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=APP_NAME, description="LangChat launch bootstrap")
    parser.add_argument(
        "--headless",
        action="store_true",
        help="run the bootstrap without a window and print each root decision",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="debug output on console")
    parser.add_argument(
        "--log-dir",
        default=None,
        help="directory for log files (default: <user config dir>/logs)",
    )
    parser.add_argument("--version", action="version", version=f"{APP_NAME} {APP_VERSION}")
    return parser


class _PrintPresenter:
    """Headless RootPresenterPort: writes each root decision to stdout."""

    def present(self, decision) -> None:
        print(f"root: {decision.value}", flush=True)


async def run_headless() -> int:
    """Run the bootstrap until it settles on a terminal root screen."""
    from langchat.boot import create_app

    components = create_app(asyncio.get_running_loop(), presenter=_PrintPresenter())
    components.scheduler.countdown_changed.connect(
        lambda seconds: logger.debug("Next retry in %ss", seconds, extra={"dev_only": True})
    )
    components.start()
    try:
        decision = await components.coordinator.run_until_settled()
    finally:
        await components.aclose()

    logger.info("Bootstrap finished on %s", decision.value)
    return 0


def run_gui() -> int:
    """Open the root window; services run on an AsyncRuntime thread."""
    from PyQt5.QtWidgets import QApplication

    from langchat.boot import AsyncRuntime, create_app
    from langchat.ui.adapters import QtRootPresenter
    from langchat.ui.widgets import RootWindow

    app = QApplication(sys.argv)
    app.setApplicationName(APP_NAME)
    app.setApplicationVersion(APP_VERSION)

    window = RootWindow()
    presenter = QtRootPresenter(window)

    runtime = AsyncRuntime().start()
    components = runtime.call(lambda: create_app(runtime.loop, presenter))
    presenter.bind(components)

    window.retry_requested.connect(lambda: runtime.call_soon(components.coordinator.retry_now))

    def shutdown() -> None:
        logger.info("Shutting down")
        presenter.unbind()
        try:
            runtime.submit(components.aclose()).result(timeout=5.0)
        except Exception as e:
            logger.warning("Error while closing components: %s", e)
        runtime.stop()

    app.aboutToQuit.connect(shutdown)
    signal.signal(signal.SIGINT, lambda _signum, _frame: app.quit())

    window.show()
    runtime.call_soon(components.start)
    return app.exec_()


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    log_dir = args.log_dir or os.path.join(get_user_config_dir(), "logs")
    ConfigureLogger(log_name=APP_NAME, log_dir=log_dir, verbose=args.verbose)
    logger.info("%s %s starting (%s mode)", APP_NAME, APP_VERSION, "headless" if args.headless else "gui")

    if args.headless:
        try:
            return asyncio.run(run_headless())
        except KeyboardInterrupt:
            logger.info("Interrupted")
            return 130

    return run_gui()
