"""Test block kinds and the match rule."""

import itertools

from unblocked.game.blocks import BlockKind, kind_from_char, kind_from_value, matches


def test_matches_reflexive():
    for kind in BlockKind:
        assert matches(kind, kind)


def test_matches_symmetric():
    for a, b in itertools.product(BlockKind, repeat=2):
        assert matches(a, b) == matches(b, a)


def test_joker_matches_everything():
    for kind in BlockKind:
        assert matches(BlockKind.JOKER, kind)
        assert matches(kind, BlockKind.JOKER)


def test_different_kinds_do_not_match():
    assert not matches(BlockKind.K1, BlockKind.K2)
    assert not matches(BlockKind.K6, BlockKind.K3)


def test_glyphs_parse_back():
    for kind in BlockKind:
        assert kind_from_char(kind.glyph) == kind


def test_alternative_spellings():
    assert kind_from_char("$") == BlockKind.K1
    assert kind_from_char("x") == BlockKind.K2
    assert kind_from_char("3") == BlockKind.K3
    assert kind_from_char(".") is None
    assert kind_from_char(" ") is None


def test_kind_from_value():
    assert kind_from_value(0) is None
    assert kind_from_value(7) == BlockKind.JOKER
