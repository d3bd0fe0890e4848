# main.py
import argparse
from pathlib import Path

from colorpick.app.session import PickSession
from colorpick.logging_setup import setup_logging
from colorpick.pick.capture import Rect, ScreenCapture
from colorpick.repos.settings_repo import SettingsRepo


def main():
    parser = argparse.ArgumentParser(description="Grab a screen region and pick representative color points.")
    parser.add_argument("--left", type=int, default=0)
    parser.add_argument("--top", type=int, default=0)
    parser.add_argument("--width", type=int, default=200)
    parser.add_argument("--height", type=int, default=200)
    parser.add_argument("--monitor", default="all")
    args = parser.parse_args()

    app_data_dir = Path("app_data")

    # 配置
    settings = SettingsRepo(app_data_dir).load_or_create()

    # 日志
    log_rt = setup_logging(
        log_dir=app_data_dir / "logs",
        level=settings.logging.level,
        console=settings.logging.console,
    )

    cap = ScreenCapture()
    try:
        source = cap.grab_source(
            Rect(left=args.left, top=args.top, width=args.width, height=args.height),
            monitor_key=args.monitor,
        )

        session = PickSession(source, color_mode=settings.display.color_mode)
        session.update_area(0, 0, source.width - 1, source.height - 1)
        session.analyze_area(settings.analyze)

        for r in session.records:
            print(f"{r.key}\t({r.x},{r.y})\t{r.c}")
    finally:
        cap.close_current_thread()
        log_rt.stop()


if __name__ == "__main__":
    main()
