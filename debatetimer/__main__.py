"""Allow running Debate Timer as a module: python -m debatetimer."""

import argparse
import logging
import sys

from PyQt6.QtWidgets import QApplication

from .app import DebateTimerApp


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="debatetimer",
        description="Speech timer with flash, vibration and sound alerts.",
    )
    parser.add_argument(
        "--debug", action="store_true", help="log alert and device details",
    )
    args, _qt_args = parser.parse_known_args(argv)
    return args


def main() -> None:
    args = parse_args(sys.argv[1:])
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = QApplication(sys.argv)
    app.setApplicationName("Debate Timer")
    app.setOrganizationName("Debate Timer")

    window = DebateTimerApp()
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
