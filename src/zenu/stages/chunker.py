"""Stage 5: Chunker – split populated sections into timed teleprompter chunks."""

from __future__ import annotations

import logging
import re

from zenu.models import PopulatedScript, ScriptChunk, TeleprompterScript
from zenu.sections import SectionKind, SectionRef

logger = logging.getLogger(__name__)

PAUSE_PER_MARK_MS = 500
BREAK_PAUSE_MS = 2000
BREAK_SECTION_TYPE = "break"

# A sentence body followed by its (possibly empty) run of terminators
_SENTENCE = re.compile(r"([^.!?]+)([.!?]*)")
_CAPS_RUN = re.compile(r"[A-Z]{2,}")
_PAUSE_MARK = re.compile(r"[,—…]")


def chunk_sentence(body: str, terminator: str, section_type: str) -> ScriptChunk | None:
    text = body.strip()
    if not text:
        return None
    spoken = f"{text}{terminator}"
    return ScriptChunk(
        # Terminators collapse to "."; the exclamation survives only as emphasis
        text=f"{text}.",
        emphasis=bool(_CAPS_RUN.search(spoken)) or "!" in spoken,
        pause=len(_PAUSE_MARK.findall(text)) * PAUSE_PER_MARK_MS,
        notes=f"[{section_type}]",
        section_type=section_type,
    )


def break_chunk(section_type: str) -> ScriptChunk:
    return ScriptChunk(
        text="",
        emphasis=False,
        pause=BREAK_PAUSE_MS,
        notes=f"[End of {section_type}]",
        section_type=BREAK_SECTION_TYPE,
    )


def generate_teleprompter_script(populated: PopulatedScript) -> TeleprompterScript:
    chunks: list[ScriptChunk] = []
    for section in populated.sections:
        for match in _SENTENCE.finditer(section.content):
            chunk = chunk_sentence(match.group(1), match.group(2), section.type)
            if chunk is not None:
                chunks.append(chunk)

        if SectionRef.parse(section.type).kind is not SectionKind.OUTRO:
            chunks.append(break_chunk(section.type))

    logger.info(
        "Chunker: %d chunks from %d sections", len(chunks), len(populated.sections)
    )
    return TeleprompterScript(chunks=chunks)
