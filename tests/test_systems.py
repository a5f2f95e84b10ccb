"""
Tests for systems.py and the package-level helpers.
"""

import threading

import pytest

import romanization
from romanization.attic import AtticNumerals
from romanization.hanja import HanjaReadings
from romanization.loading.tables import CsvTableProvider, TableLoadError
from romanization.numerals import OutputNumeralType
from romanization.pinyin import HanyuPinyin, PinyinReadingType
from romanization.systems import (
    NumeralParsingSystem,
    ReadingsSystem,
    SystemName,
    SystemRegistry,
    UnknownSystemError,
    create_system,
)


class TestSystemName:
    """Tests for looking up systems by name."""

    @pytest.mark.parametrize("name,expected", [
        ("hanyu-pinyin", SystemName.HANYU_PINYIN),
        ("pinyin", SystemName.HANYU_PINYIN),
        ("HANYU_PINYIN", SystemName.HANYU_PINYIN),
        ("hanja", SystemName.HANJA_READINGS),
        ("hanja-readings", SystemName.HANJA_READINGS),
        (" attic ", SystemName.ATTIC_NUMERALS),
        ("attic_numerals", SystemName.ATTIC_NUMERALS),
    ])
    def test_parse(self, name, expected):
        assert SystemName.parse(name) is expected

    def test_parse_member(self):
        assert SystemName.parse(SystemName.HANJA_READINGS) is SystemName.HANJA_READINGS

    def test_unknown(self):
        with pytest.raises(UnknownSystemError) as exc_info:
            SystemName.parse("klingon")
        assert exc_info.value.name == "klingon"
        assert "hanyu-pinyin" in str(exc_info.value)

    def test_unknown_is_key_error(self):
        with pytest.raises(KeyError):
            SystemName.parse("klingon")


class TestCreateSystem:
    """Tests for create_system()."""

    def test_pinyin(self, bundled_provider):
        system = create_system("pinyin", provider=bundled_provider)
        assert isinstance(system, HanyuPinyin)
        assert isinstance(system, ReadingsSystem)

    def test_hanja(self, bundled_provider):
        system = create_system(SystemName.HANJA_READINGS, provider=bundled_provider)
        assert isinstance(system, HanjaReadings)

    def test_attic(self):
        system = create_system("attic")
        assert isinstance(system, AtticNumerals)
        assert isinstance(system, NumeralParsingSystem)

    def test_options_passed(self, bundled_provider):
        system = create_system("pinyin", provider=bundled_provider,
                               readings_to_use=PinyinReadingType.XHC)
        assert system.readings_to_use == PinyinReadingType.XHC

    def test_fresh_instances(self, bundled_provider):
        first = create_system("hanja", provider=bundled_provider)
        second = create_system("hanja", provider=bundled_provider)
        assert first is not second

    def test_load_failure(self, tmp_path):
        with pytest.raises(TableLoadError):
            create_system("pinyin", provider=CsvTableProvider(tmp_path))

    def test_unknown(self):
        with pytest.raises(UnknownSystemError):
            create_system("klingon")


class TestSystemRegistry:
    """Tests for the caller-owned system cache."""

    @pytest.fixture
    def registry(self, bundled_provider):
        return SystemRegistry(provider=bundled_provider)

    def test_cached(self, registry):
        assert registry.get("pinyin") is registry.get("hanyu-pinyin")

    def test_contains(self, registry):
        assert "hanja" not in registry
        registry.get("hanja")
        assert "hanja" in registry
        assert SystemName.HANJA_READINGS in registry

    def test_attic_ignores_provider(self, registry):
        assert isinstance(registry.get("attic"), AtticNumerals)

    def test_clear(self, registry):
        first = registry.get("attic")
        registry.clear()
        assert "attic" not in registry
        assert registry.get("attic") is not first

    def test_registries_independent(self, bundled_provider):
        one = SystemRegistry(provider=bundled_provider)
        two = SystemRegistry(provider=bundled_provider)
        assert one.get("hanja") is not two.get("hanja")

    def test_failed_load_not_cached(self, tmp_path):
        registry = SystemRegistry(provider=CsvTableProvider(tmp_path))
        with pytest.raises(TableLoadError):
            registry.get("pinyin")
        assert "pinyin" not in registry

    def test_options_apply_to_one_system(self, bundled_provider):
        registry = SystemRegistry(
            provider=bundled_provider,
            options={'pinyin': {'readings_to_use': PinyinReadingType.XHC}},
        )
        assert registry.get("pinyin").process("们") == "mén"
        assert registry.get("hanja").process("韓") == "한"
        assert isinstance(registry.get("attic"), AtticNumerals)

    def test_options_for(self, bundled_provider):
        registry = SystemRegistry(
            provider=bundled_provider,
            options={SystemName.HANYU_PINYIN: {'readings_to_use': PinyinReadingType.XHC}},
        )
        assert registry.options_for(SystemName.HANYU_PINYIN) == {
            'readings_to_use': PinyinReadingType.XHC, 'provider': bundled_provider,
        }
        assert registry.options_for(SystemName.HANJA_READINGS) == {'provider': bundled_provider}
        assert registry.options_for(SystemName.ATTIC_NUMERALS) == {}

    def test_options_for_unknown_system(self):
        with pytest.raises(UnknownSystemError):
            SystemRegistry(options={'klingon': {}})

    def test_mismatched_reading_types(self, bundled_provider):
        """Reading types of another system are refused when the system is built."""
        with pytest.raises(TypeError):
            HanjaReadings(PinyinReadingType.XHC, provider=bundled_provider)

    def test_concurrent_first_requests(self, registry):
        results = []

        def worker():
            results.append(registry.get("pinyin"))

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(results) == 8
        assert all(r is results[0] for r in results)

    def test_shared_instance_across_threads(self, registry):
        """A built system is read-only and gives the same answer everywhere."""
        pinyin = registry.get("pinyin")
        results = []

        def worker():
            results.append(pinyin.process("现代汉语"))

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert results == ["xiàndàihànyǔ"] * 4


class TestPackageHelpers:
    """Tests for romanization.process and friends."""

    @pytest.fixture
    def registry(self, bundled_provider):
        return SystemRegistry(provider=bundled_provider)

    def test_process_readings(self, pinyin):
        assert romanization.process("汉语", pinyin) == "hànyǔ"

    def test_process_numerals(self, attic):
        text = "Δ\u0305Ι\u0305 and Ι\u0305Ι\u0305"
        assert romanization.process(text, attic) == "11 and 2"
        assert romanization.process(text, attic, OutputNumeralType.ROMAN) == "XI and II"

    def test_process_with_readings(self, pinyin):
        assert romanization.process_with_readings("中国", pinyin).flatten() == "[zhōng zhòng]guó"

    def test_romanize(self, registry):
        assert romanization.romanize("韓國", "hanja", registry=registry) == "한국"
        assert "hanja" in registry

    def test_romanize_unknown(self, registry):
        with pytest.raises(UnknownSystemError):
            romanization.romanize("x", "klingon", registry=registry)
