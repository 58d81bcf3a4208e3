# ragparsers/core/processor/vtt_handler.py
"""
VTT Handler - WebVTT subtitle processor

Class-based handler for WebVTT transcripts inheriting from BaseHandler.

Each cue becomes a quoted timing line followed by its text; voice spans
name the speaker:

    > [00:00:01.000 / 00:00:02.500]

    **Alice:** Hello everyone
"""
import logging
import re
from dataclasses import dataclass, field
from datetime import timedelta
from typing import List, Optional, TYPE_CHECKING

from ragparsers.core.processor.base_handler import BaseHandler
from ragparsers.core.functions.extract_output import ExtractOutput

if TYPE_CHECKING:
    from ragparsers.core.document_processor import CurrentFile

logger = logging.getLogger("document-processor")


DEFAULT_ENCODINGS = ['utf-8-sig', 'utf-8', 'latin-1']

_TIMESTAMP = r'(?:\d{2,}:)?\d{2}:\d{2}\.\d{3}'
CUE_TIMING_PATTERN = re.compile(
    rf'^(?:(?P<id>\S+)\s+)?(?P<start>{_TIMESTAMP})\s+-->\s+(?P<end>{_TIMESTAMP})'
)
SPEAKER_PATTERN = re.compile(r'<v(?:\.[^\s>]*)?\s+([^>]+)>')
VOICE_END_PATTERN = re.compile(r'</v>')


@dataclass
class Cue:
    """One subtitle cue"""
    start: str
    end: str
    lines: List[str] = field(default_factory=list)


def parse_timestamp(value: str) -> timedelta:
    """'hh:mm:ss.fff' or 'mm:ss.fff' -> timedelta"""
    parts = value.split(':')
    seconds = float(parts[-1])
    minutes = int(parts[-2])
    hours = int(parts[-3]) if len(parts) > 2 else 0
    return timedelta(hours=hours, minutes=minutes, seconds=seconds)


def format_duration(duration: timedelta) -> str:
    """timedelta -> 'hh:mm:ss.fff'"""
    total_ms = max(0, round(duration.total_seconds() * 1000))
    hours, rest = divmod(total_ms, 3_600_000)
    minutes, rest = divmod(rest, 60_000)
    seconds, millis = divmod(rest, 1000)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}.{millis:03d}"


def format_cue_line(line: str) -> str:
    """Cue text line with its voice span turned into a bold speaker label."""
    line = VOICE_END_PATTERN.sub("", line)
    match = SPEAKER_PATTERN.search(line)
    if not match:
        return line.strip()
    speaker = match.group(1).strip()
    text = line[match.end():].strip()
    return f"**{speaker}:** {text}"


def parse_cues(text: str) -> List[Cue]:
    """
    Split a WebVTT document into cues.

    The WEBVTT header and blank lines are skipped. A line immediately followed
    by a timing line is a cue identifier and is dropped.
    """
    lines = [line.rstrip('\r') for line in text.split('\n')]

    cues: List[Cue] = []
    current: Optional[Cue] = None

    for idx, line in enumerate(lines):
        if not line.strip() or line.startswith('WEBVTT'):
            continue

        timing = CUE_TIMING_PATTERN.match(line.strip())
        if timing:
            current = Cue(start=timing.group('start'), end=timing.group('end'))
            cues.append(current)
            continue

        next_line = lines[idx + 1].strip() if idx + 1 < len(lines) else ""
        if CUE_TIMING_PATTERN.match(next_line):
            continue

        if current is not None:
            current.lines.append(format_cue_line(line))

    return [cue for cue in cues if any(cue.lines)]


def format_cue(cue: Cue) -> str:
    """Markdown block of one cue."""
    duration = parse_timestamp(cue.end) - parse_timestamp(cue.start)
    header = f"> [{cue.start} / {format_duration(duration)}]"
    body = "\n".join(line for line in cue.lines if line)
    return f"{header}\n\n{body}"


class VTTHandler(BaseHandler):
    """WebVTT transcript processing handler"""

    def extract(self, current_file: "CurrentFile", encodings: Optional[List[str]] = None) -> ExtractOutput:
        """
        Convert a WebVTT transcript to Markdown.

        Args:
            current_file: CurrentFile dict containing file info and binary data
            encodings: Encodings to try in order

        Returns:
            ExtractOutput (Markdown only)
        """
        file_path = current_file.get("file_path", "unknown")
        data = self.get_file_data(current_file)
        if not data:
            self.logger.warning(f"Empty VTT stream: {file_path}")
            return ExtractOutput()

        text = self._decode(data, encodings or DEFAULT_ENCODINGS, file_path)
        cues = parse_cues(text)
        self.logger.info(f"VTT processing completed: {file_path}, {len(cues)} cues")

        return ExtractOutput(output="\n\n".join(format_cue(cue) for cue in cues).strip())

    def _decode(self, data: bytes, encodings: List[str], file_path: str) -> str:
        for enc in encodings:
            try:
                text = data.decode(enc)
                self.logger.debug(f"Decoded {file_path} with {enc} encoding")
                return text
            except UnicodeDecodeError:
                self.logger.debug(f"Failed to decode {file_path} with {enc}, trying next...")
                continue
        raise ValueError(f"Could not decode file {file_path} with any supported encoding")


__all__ = [
    "VTTHandler",
    "Cue",
    "parse_cues",
    "format_cue",
    "parse_timestamp",
    "format_duration",
]
