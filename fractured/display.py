"""Display labels derived from content ids."""

from __future__ import annotations

from fractured.models import Speaker

SPEAKER_NAMES: dict[Speaker, str] = {
    Speaker.PLAYER: "YOU",
    Speaker.IRIS: "DR. IRIS CHEN",
    Speaker.SARAH: "DET. SARAH REEVES",
    Speaker.SYSTEM: "SYSTEM ALERT",
    Speaker.COLLECTIVE: "THE COLLECTIVE",
    Speaker.UNKNOWN: "",  # narration has no speaker label
    Speaker.HALLUCINATION: "???",
    Speaker.DR_ZHAO: "DR. ZHAO",
    Speaker.CASSANDRA: "CASSANDRA VALE",
    Speaker.MARCUS: "MARCUS WEBB",
    Speaker.AVA: "DR. AVA WINTERS",
    Speaker.JENNIFER: "JENNIFER PARK",
    Speaker.ALEX: "ALEX (FRAGMENT)",
    Speaker.DIGITAL_ALEX: "DIGITAL ALEX",
    Speaker.COMMITTEE_CHAIR: "COMMITTEE CHAIR",
}


def speaker_name(speaker: Speaker | str) -> str:
    """Label for a speaker; anything unrecognised gets no label."""
    try:
        return SPEAKER_NAMES.get(Speaker(speaker), "")
    except ValueError:
        return ""


def chapter_title(scene_id: str) -> str:
    if "prologue" in scene_id:
        return "PROLOGUE // AWAKENING"
    if "dive" in scene_id:
        return "INTERLUDE // DEEP_DIVE"
    if "ending" in scene_id:
        return "TERMINAL // SEQUENCE"
    return "CHAPTER 1 // GHOST_CODE"
