"""`convorec replay` command: rebuilds WAV artifacts from a captured event log.

The event log is JSON lines, one capture callback per line::

    {"origin": "local", "samples": [100, 200, -300]}
    {"origin": "remote", "audio": "<base64 PCM16>"}

Events are replayed in file order through a SessionRecorder, which is then
stopped and exported to a directory.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import NoReturn

import click

from convorec._audio_constants import MAX_SAMPLE_RATE, MIN_SAMPLE_RATE
from convorec._types import MergeScope
from convorec.cli.main import cli
from convorec.config.settings import get_settings
from convorec.exceptions import AudioFormatError, NoAudioDataError, SinkError
from convorec.session.recorder import SessionRecorder
from convorec.sink.filesystem import FileSystemArtifactSink


def _fail(message: str) -> NoReturn:
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


def _replay_events(recorder: SessionRecorder, events_file: Path) -> int:
    """Feed every event in ``events_file`` to the recorder. Returns the event count."""
    count = 0
    with events_file.open("r", encoding="utf-8") as f:
        for lineno, line in enumerate(f, start=1):
            line = line.strip()
            if not line:
                continue
            try:
                event = json.loads(line)
            except json.JSONDecodeError as exc:
                _fail(f"line {lineno}: invalid JSON ({exc.msg})")
            if not isinstance(event, dict):
                _fail(f"line {lineno}: expected a JSON object")

            origin = event.get("origin")
            if origin == "local":
                try:
                    recorder.add_local_audio(event.get("samples") or [])
                except AudioFormatError as exc:
                    _fail(f"line {lineno}: {exc}")
            elif origin == "remote":
                recorder.add_remote_audio(event.get("audio") or "")
            else:
                _fail(f"line {lineno}: unknown origin {origin!r} (expected 'local' or 'remote')")
            count += 1
    return count


@cli.command()
@click.argument("events_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--output-dir",
    "-o",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory for WAV files (default: CONVOREC_OUTPUT_DIR).",
)
@click.option(
    "--scope",
    "scopes",
    type=click.Choice([s.value for s in MergeScope]),
    multiple=True,
    default=("all",),
    show_default=True,
    help="Which stream to export. Repeat for several files.",
)
@click.option(
    "--sample-rate",
    type=click.IntRange(MIN_SAMPLE_RATE, MAX_SAMPLE_RATE),
    default=None,
    help="Sample rate of the recorded PCM (default: CONVOREC_SAMPLE_RATE).",
)
def replay(
    events_file: Path,
    output_dir: Path | None,
    scopes: tuple[str, ...],
    sample_rate: int | None,
) -> None:
    """Replays a JSON-lines capture log and writes WAV files.

    Prints one line per written file, then the session stats as JSON.
    """
    settings = get_settings()
    target_dir = output_dir if output_dir is not None else Path(settings.sink.output_dir)

    recorder = SessionRecorder(
        sample_rate=sample_rate or settings.recorder.sample_rate,
        sink=FileSystemArtifactSink(target_dir),
        filename_prefix=settings.recorder.filename_prefix,
    )
    recorder.start()
    _replay_events(recorder, events_file)
    recorder.stop()

    if not recorder.has_data():
        _fail(f"no audio found in {events_file}")

    for scope_value in dict.fromkeys(scopes):
        scope = MergeScope(scope_value)
        try:
            location = recorder.export_artifact(scope)
        except NoAudioDataError:
            click.echo(f"Skipping '{scope.value}': no audio for this scope", err=True)
            continue
        except SinkError as exc:
            _fail(str(exc))
        click.echo(location)

    if recorder.dropped_frames:
        click.echo(f"Warning: {recorder.dropped_frames} malformed remote frame(s) dropped", err=True)
    click.echo(json.dumps(recorder.stats().as_dict(), indent=2))
