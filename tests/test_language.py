import pytest

from review_advisor.errors import GenerationFailed
from review_advisor.generation.language import LanguageConformanceGate, script_ratio


def test_script_ratio_han():
    assert script_ratio("牛肉麵") == 1.0
    assert script_ratio("ab牛肉") == 0.5
    assert script_ratio("hello") == 0.0
    assert script_ratio("") == 0.0


def test_script_ratio_other_scripts():
    assert script_ratio("すし", "hiragana") == 1.0
    assert script_ratio("ラーメン", "katakana") == 1.0
    assert script_ratio("김치", "hangul") == 1.0
    assert script_ratio("김치", "han") == 0.0


def test_unknown_script_rejected(stub_generator):
    with pytest.raises(ValueError):
        LanguageConformanceGate(stub_generator(), script="cyrillic")


def test_conforming_text_returned_without_generation(stub_generator, make_gate):
    generator = stub_generator()
    gate = make_gate(generator)
    text = "湯頭濃郁，服務親切。Great!"
    assert gate.ensure(text) == text
    assert generator.prompts == []


def test_ensure_is_idempotent_on_conforming_text(stub_generator, make_gate):
    gate = make_gate(stub_generator())
    text = "餐點美味，環境舒適。"
    assert gate.ensure(gate.ensure(text)) == gate.ensure(text)


def test_threshold_boundary_is_inclusive(stub_generator, make_gate):
    generator = stub_generator()
    gate = make_gate(generator)
    text = "牛肉麵abcdefg"  # 3 of 10
    assert script_ratio(text) == pytest.approx(0.3)
    assert gate.ensure(text) == text
    assert generator.prompts == []


def test_low_ratio_triggers_exactly_one_translation(stub_generator, make_gate):
    # 1 Han character in 10 -> 10%
    text = "麵 is good!"
    assert script_ratio(text) == pytest.approx(0.1)
    generator = stub_generator("麵很好吃")
    gate = make_gate(generator)

    assert gate.ensure(text) == "麵很好吃"
    assert len(generator.prompts) == 1
    assert generator.prompts[0].startswith("請把下列內容完整翻成「繁體中文」")
    assert generator.prompts[0].endswith("\n" + text)


def test_non_conforming_translation_is_returned_without_retry(stub_generator, make_gate):
    generator = stub_generator("Still English")
    gate = make_gate(generator)
    assert gate.ensure("Plain English answer") == "Still English"
    assert len(generator.prompts) == 1


def test_empty_text_is_not_translated(stub_generator, make_gate):
    generator = stub_generator()
    assert make_gate(generator).ensure("") == ""
    assert generator.prompts == []


def test_translation_failure_propagates(stub_generator, make_gate):
    gate = make_gate(stub_generator(GenerationFailed(500, "boom")))
    with pytest.raises(GenerationFailed):
        gate.ensure("English only")


def test_from_settings_uses_threshold(settings, prompts, stub_generator):
    settings = settings.model_copy(update={"conformance_threshold": 0.9})
    generator = stub_generator("全中文")
    gate = LanguageConformanceGate.from_settings(generator, prompts, settings)
    assert gate.threshold == 0.9
    assert gate.ensure("半中文 half") == "全中文"
