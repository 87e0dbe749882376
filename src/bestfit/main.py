"""
Application Initialization
==========================
This module constructs the engine and the main window and starts the Qt
event loop.

Why is this file needed?
------------------------
It acts as the "Dependency Injection" root. It:
1. Resolves the configuration (QSettings, then command line overrides).
2. Instantiates the RegressionEngine.
3. Passes the engine into the Main Window, which registers the renderers.
"""
from __future__ import annotations

import argparse
import logging
from typing import Sequence

import numpy as np
import pyqtgraph as pg
from PySide6.QtCore import QSettings

from bestfit.app.application import create_app
from bestfit.config import EngineConfig
from bestfit.logging_config import setup_logging
from bestfit.model.engine import RegressionEngine
from bestfit.view.main_window import MainWindow

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="bestfit", description="Interactive least-squares line of best fit.")
    parser.add_argument("--width", type=float, help="Canvas width (default from settings, else 600).")
    parser.add_argument("--height", type=float, help="Canvas height (default from settings, else 500).")
    parser.add_argument("--batch-size", type=int, help="Points added per generate (default 21).")
    parser.add_argument("--seed", type=int, help="Seed for point positions and colors.")
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    parser.add_argument("--log-file", help="Also write the log to this file.")
    return parser


def resolve_config(args: argparse.Namespace, settings: QSettings) -> EngineConfig:
    """Stored preferences, overridden by any flag given on the command line."""
    stored = EngineConfig.from_settings(settings)
    return EngineConfig(
        width=args.width if args.width is not None else stored.width,
        height=args.height if args.height is not None else stored.height,
        batch_size=args.batch_size if args.batch_size is not None else stored.batch_size,
    )


def qt_argv(argv: Sequence[str] | None) -> list[str] | None:
    """QApplication argv for `argv`; None leaves Qt on sys.argv."""
    if argv is None:
        return None
    return [build_parser().prog, *argv]


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    # 1. Setup Logging (Console + Optional File)
    setup_logging(level=getattr(logging, args.log_level), log_file=args.log_file)

    # 2. Create the Qt Application
    app = create_app(qt_argv(argv))
    pg.setConfigOptions(antialias=True, background="w", foreground="k")

    # 3. Initialize the engine
    config = resolve_config(args, QSettings())
    logger.info(f"Canvas {config.width:g}x{config.height:g}, batch size {config.batch_size}.")
    engine = RegressionEngine.from_config(config, rng=np.random.default_rng(args.seed))

    # 4. Initialize the Main Window, passing the engine
    window = MainWindow(engine)
    window.show()

    # 5. Start Event Loop
    return app.exec()
