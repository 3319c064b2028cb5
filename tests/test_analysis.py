"""Tests for playthrough analysis and display labels."""

from fractured.analysis import analyze_history
from fractured.display import chapter_title, speaker_name
from fractured.models import Speaker, StatDelta


# ── analyze_history ──────────────────────────────────────


def test_path_nodes(graph):
    nodes = analyze_history(["start", "hall", "door", "end"], graph)
    assert [n.kind for n in nodes] == ["start", "decision", "narrative", "end"]
    assert [n.label for n in nodes] == ["INIT_SEQ", "MEM_FRAGMENT", "ALTERATION", "MEM_FRAGMENT"]
    assert nodes[2].impact == StatDelta(corruption=15, truth=5)
    assert nodes[3].impact is None  # door reached end by auto-transition, not a choice


def test_missing_scenes_skipped(graph):
    nodes = analyze_history(["start", "ghost", "hall"], graph)
    assert [(n.index, n.scene_id) for n in nodes] == [(0, "start"), (2, "hall")]
    assert nodes[1].kind == "end"


def test_empty_history(graph):
    assert analyze_history([], graph) == []


def test_story_path(story):
    nodes = analyze_history(["start", "prologue_1", "prologue_2", "prologue_3", "prologue_4", "prologue_a1"], story)
    assert nodes[0].kind == "start"
    assert nodes[4].kind == "decision"
    assert nodes[5].impact == StatDelta(truth=5)
    assert nodes[5].label == "ALTERATION"


# ── Display labels ───────────────────────────────────────


def test_speaker_names():
    assert speaker_name(Speaker.IRIS) == "DR. IRIS CHEN"
    assert speaker_name("DIGITAL_ALEX") == "DIGITAL ALEX"
    assert speaker_name(Speaker.UNKNOWN) == ""


def test_every_speaker_has_a_name():
    for speaker in Speaker:
        assert isinstance(speaker_name(speaker), str)


def test_unknown_speaker_has_no_label():
    assert speaker_name("THE_VOID") == ""


def test_chapter_titles():
    assert chapter_title("prologue_3") == "PROLOGUE // AWAKENING"
    assert chapter_title("dive_end_clean") == "INTERLUDE // DEEP_DIVE"
    assert chapter_title("ending_c_evolution") == "TERMINAL // SEQUENCE"
    assert chapter_title("chapter_4_start") == "CHAPTER 1 // GHOST_CODE"
