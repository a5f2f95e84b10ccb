"""
Tests for readings.py - reading resolution, flattening and first readings.
"""

import enum

import pytest

from romanization.readings import (
    Reading,
    ReadingCharacter,
    ReadingSource,
    ReadingsString,
    first_readings,
    flatten,
    resolve,
    resolve_character,
)


class Source(enum.Flag):
    A = 1
    B = 1 << 1
    C = 1 << 2


ALL = Source.A | Source.B | Source.C


@pytest.fixture
def sources():
    return [
        ReadingSource(Source.A, {'X': ['p'], 'Y': ['a', 'b']}),
        ReadingSource(Source.B, {'X': ['q'], 'Y': ['a']}),
        ReadingSource(Source.C, {'Z': ['z1', 'z2']}),
    ]


class TestResolve:
    """Tests for resolve()."""

    def test_source_priority(self, sources):
        """Requested sources contribute in declared order."""
        rc = resolve('X', Source.A | Source.B, sources)[0]
        assert [r.value for r in rc.readings] == ['p', 'q']
        assert [r.type for r in rc.readings] == [Source.A, Source.B]

    def test_only_requested_sources(self, sources):
        rc = resolve('X', Source.B, sources)[0]
        assert rc.readings == (Reading(Source.B, 'q'),)

    def test_request_order_does_not_matter(self, sources):
        """Union order is irrelevant; declared source order decides."""
        rc = resolve('X', Source.B | Source.A, sources)[0]
        assert [r.value for r in rc.readings] == ['p', 'q']

    def test_within_source_order(self, sources):
        rc = resolve('Z', ALL, sources)[0]
        assert [r.value for r in rc.readings] == ['z1', 'z2']

    def test_unknown_character_has_no_readings(self, sources):
        rc = resolve('?', ALL, sources)[0]
        assert rc.character == '?'
        assert rc.readings == ()

    def test_one_character_per_unit(self, sources):
        rs = resolve('XY?Z', ALL, sources)
        assert len(rs) == 4
        assert [c.character for c in rs] == ['X', 'Y', '?', 'Z']
        assert rs.text == 'XY?Z'

    def test_empty_input(self, sources):
        rs = resolve('', ALL, sources)
        assert len(rs) == 0
        assert flatten(rs) == ''
        assert first_readings(rs) == ''

    def test_surrogate_pair_is_one_character(self):
        pair = '\ud800\udd7c'
        table = ReadingSource(Source.A, {pair: ['obol']})
        rs = resolve('a' + pair, Source.A, [table])
        assert [c.character for c in rs] == ['a', pair]
        assert rs.first_readings() == 'aobol'

    def test_astral_key(self):
        table = ReadingSource(Source.A, {'𠀀': ['qiū']})
        assert resolve('𠀀', Source.A, [table]).first_readings() == 'qiū'

    def test_resolve_character(self, sources):
        rc = resolve_character('Y', Source.A, sources)
        assert rc == ReadingCharacter('Y', (Reading(Source.A, 'a'), Reading(Source.A, 'b')))


class TestFlatten:
    """Tests for flattening readings into display strings."""

    def test_no_readings_returns_character(self):
        assert flatten(ReadingCharacter('?')) == '?'

    def test_single_reading_bare(self):
        rc = ReadingCharacter('X', (Reading(Source.A, 'a'),))
        assert flatten(rc) == 'a'

    def test_duplicates_collapse(self):
        rc = ReadingCharacter('X', (
            Reading(Source.A, 'a'), Reading(Source.A, 'a'), Reading(Source.B, 'b'),
        ))
        assert flatten(rc) == '[a b]'

    def test_duplicate_across_sources_single_value(self):
        rc = ReadingCharacter('X', (Reading(Source.A, 'a'), Reading(Source.B, 'a')))
        assert flatten(rc) == 'a'

    def test_first_seen_order(self):
        rc = ReadingCharacter('X', (
            Reading(Source.A, 'b'), Reading(Source.B, 'a'), Reading(Source.C, 'b'),
        ))
        assert flatten(rc) == '[b a]'

    def test_string_concatenation(self, sources):
        rs = resolve('XY?Z', ALL, sources)
        assert flatten(rs) == '[p q][a b]?[z1 z2]'
        assert str(rs) == flatten(rs)

    def test_character_str(self):
        rc = ReadingCharacter('X', (Reading(Source.A, 'p'), Reading(Source.B, 'q')))
        assert str(rc) == "'X' [p q]"


class TestFirstReadings:
    """Tests for the best-guess first-reading policy."""

    def test_first_reading_per_character(self, sources):
        rs = resolve('XY?Z', ALL, sources)
        assert first_readings(rs) == 'pa?z1'

    def test_respects_requested_sources(self, sources):
        rs = resolve('XY', Source.B, sources)
        assert first_readings(rs) == 'qa'

    def test_passthrough(self, sources):
        assert first_readings(resolve('plain', ALL, sources)) == 'plain'


class TestValueTypes:
    """Tests for immutability and equality of the value types."""

    def test_reading_frozen(self):
        reading = Reading(Source.A, 'a')
        with pytest.raises(AttributeError):
            reading.value = 'b'

    def test_readings_string_equality(self, sources):
        assert resolve('XY', ALL, sources) == resolve('XY', ALL, sources)

    def test_readings_string_indexing(self, sources):
        rs = resolve('XY', ALL, sources)
        assert isinstance(rs, ReadingsString)
        assert rs[1].character == 'Y'
        assert list(rs) == list(rs.characters)
