"""
Tests for hanja.py - Hanja to Hangeul over the bundled tables.
"""

import pytest

from romanization.hanja import HanjaReadings, HanjaReadingType, hangeul_syllables


class TestHanjaReadings:
    """Tests for Hanja to Hangeul conversion."""

    def test_process_to_hangeul(self, hanja):
        assert hanja.process_to_hangeul("韓國") == "한국"

    def test_passthrough(self, hanja):
        assert hanja.process_to_hangeul("大學校!") == "대학校!"

    def test_romanizer_applied(self, hanja):
        table = {"한": "han", "국": "guk"}
        result = hanja.process("韓國", romanizer=lambda text: ''.join(table.get(c, c) for c in text))
        assert result == "hanguk"

    def test_all_readings(self, hanja):
        rs = hanja.process_with_readings("樂")
        assert rs.flatten() == "[락 낙 악 요]"
        assert {r.type for r in rs[0].readings} == {HanjaReadingType.HANGEUL}

    def test_hangeul_syllables(self):
        assert hangeul_syllables("금 김") == ("금", "김")
        assert hangeul_syllables("대학") == ("대",)
        assert hangeul_syllables("금  김") == ("금", "김")

    def test_empty_selection(self, bundled_provider):
        """Requesting no tables leaves every character untouched."""
        system = HanjaReadings(HanjaReadingType(0), provider=bundled_provider)
        assert system.process("韓國") == "韓國"

    def test_table_read_only(self, hanja):
        assert hanja.hangeul_readings["金"] == ("금", "김")
        with pytest.raises(TypeError):
            hanja.hangeul_readings["金"] = ("김",)
