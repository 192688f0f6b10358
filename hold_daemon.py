#!/usr/bin/env python3
"""
hold_daemon.py – Hold-to-Confirm Daemon für holdtrigger.

Lauscht auf einen einzelnen Eingang (Taste oder Maustaste) und gibt erst
dann `activated` aus, wenn er mindestens `--duration` Sekunden gehalten
wurde. Nach dem Loslassen folgt `deactivated`.

Events gehen auf stdout (eine Zeile pro Event), Status auf stderr.

Architektur:
- Main Thread: ThreadedFrameClock (Ticks + Event-Dispatch)
- pynput Listener-Thread: reicht Press/Release per call_soon an den Main Thread

Usage:
    python hold_daemon.py                       # Defaults aus .env
    python hold_daemon.py --input f19 --duration 1.5
    python hold_daemon.py -i mouse_left --format json | jq .
"""

import json
import logging
from typing import Annotated

import typer

from cli.types import OutputFormat
from config import DEFAULT_INPUT
from input_platform import get_frame_clock
from trigger import HoldTrigger, InputPayload, InvalidConfiguration, Trigger
from utils.env import load_environment
from utils.logging import error, get_session_id, log, setup_logging

logger = logging.getLogger("holdtrigger")

app = typer.Typer(
    help="Hold-to-Confirm: Event erst nach gehaltener Taste",
    add_completion=False,
)


def format_event(
    event: str, payload: InputPayload, output_format: OutputFormat, timestamp: float
) -> str:
    """Formatiert ein Trigger-Event als einzelne stdout-Zeile."""
    if output_format == OutputFormat.json:
        return json.dumps(
            {
                "event": event,
                "input": payload.input_name,
                "value": payload.value,
                "time": round(timestamp, 3),
            }
        )
    if payload.value is None:
        return f"{event} {payload.input_name}"
    return f"{event} {payload.input_name} {payload.value}"


class HoldDaemon:
    """
    Verbindet Frame-Clock, HoldTrigger und stdout-Ausgabe.

    State-Flow:
        idle → [gedrückt] → timing → [Dauer erreicht] → active → [losgelassen] → idle
    """

    def __init__(self, trigger: Trigger, clock, output_format: OutputFormat):
        self.trigger = trigger
        self.clock = clock
        self.output_format = output_format

        trigger.on_activated(lambda payload: self._emit("activated", payload))
        trigger.on_deactivated(lambda payload: self._emit("deactivated", payload))

    def _emit(self, event: str, payload: InputPayload) -> None:
        logger.info(f"[{get_session_id()}] {event}: {payload.input_name}")
        print(format_event(event, payload, self.output_format, self.clock.now()), flush=True)

    def run(self) -> None:
        """Startet die Frame-Loop (blockiert bis Ctrl+C oder stop())."""
        try:
            self.clock.run()
        except KeyboardInterrupt:
            logger.info("Daemon beendet (Ctrl+C)")
        finally:
            self.stop()

    def stop(self) -> None:
        self.trigger.destroy()
        self.clock.stop()


@app.command()
def main(
    input_name: Annotated[
        str,
        typer.Option(
            "--input",
            "-i",
            help="Einzelne Taste oder Maustaste (z.B. f19, space, mouse_left)",
            envvar="HOLDTRIGGER_INPUT",
        ),
    ] = DEFAULT_INPUT,
    duration: Annotated[
        float | None,
        typer.Option(
            help="Haltedauer in Sekunden (default: 1.0)",
            envvar="HOLDTRIGGER_HOLD_DURATION",
        ),
    ] = None,
    fps: Annotated[
        int | None,
        typer.Option(
            help="Tick-Frequenz der Frame-Clock (default: 60)",
            envvar="HOLDTRIGGER_FPS",
        ),
    ] = None,
    output_format: Annotated[
        OutputFormat,
        typer.Option("--format", help="Ausgabeformat für Events"),
    ] = OutputFormat.text,
    debug: Annotated[
        bool,
        typer.Option(help="Debug-Logging aktivieren"),
    ] = False,
) -> None:
    """Gibt activated/deactivated aus, sobald ein Eingang lange genug gehalten wird.

    Beispiele:
        hold_daemon.py --input f19
        hold_daemon.py --input space --duration 2
        hold_daemon.py -i mouse_right --format json
    """
    setup_logging(debug=debug)

    try:
        clock = get_frame_clock(fps)
    except ValueError as e:
        error(str(e))
        raise typer.Exit(2)

    try:
        trigger = HoldTrigger(input_name, duration, frame_clock=clock)
    except InvalidConfiguration as e:
        error(str(e))
        raise typer.Exit(2)
    except ImportError as e:
        error(f"{e} (pip install pynput)")
        raise typer.Exit(1)

    logger.info(
        f"[{get_session_id()}] Daemon gestartet: input={trigger.input_name}, "
        f"duration={trigger.hold_duration}s, fps={clock.fps}"
    )
    log("⏱  hold_daemon läuft")
    log(f"   Eingang: {trigger.input_name}")
    log(f"   Haltedauer: {trigger.hold_duration}s")
    log("   Beenden: Ctrl+C")

    HoldDaemon(trigger, clock, output_format).run()


def run() -> None:
    """Entry-Point: .env laden bevor Typer ENV-Defaults auswertet."""
    load_environment()
    app()


if __name__ == "__main__":
    run()
