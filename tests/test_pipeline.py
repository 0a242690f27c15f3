from datetime import datetime

import pytest

from review_advisor.errors import GenerationFailed, RetrievalEmpty, RetrievalFailed
from review_advisor.generation.models import SummaryResult
from review_advisor.generation.pipeline import SummaryPipeline
from review_advisor.reviews.aggregator import ReviewAggregator
from review_advisor.reviews.models import ReviewDocument


class FakeStore:
    def __init__(self, documents=None, error=None):
        self.documents = documents or []
        self.error = error
        self.requested = []

    def list_reviews(self, restaurant_id):
        self.requested.append(restaurant_id)
        if self.error:
            raise self.error
        return self.documents


def _doc(comment_json):
    return ReviewDocument.from_json(
        {"name": "restaurants/r/reviews/1", "fields": {"comment": comment_json}}
    )


@pytest.fixture
def make_pipeline(prompts, make_gate):
    def _make(store, generator):
        return SummaryPipeline(
            store=store,
            aggregator=ReviewAggregator(),
            prompts=prompts,
            generator=generator,
            gate=make_gate(generator),
        )

    return _make


def test_summary_from_reviews(stub_generator, make_pipeline):
    store = FakeStore(
        [
            _doc({"stringValue": "Great noodles"}),
            _doc({"arrayValue": {"values": [{"stringValue": "GUIDED_DINING_SOLO"}]}}),
            _doc({"stringValue": "湯頭很讚"}),
        ]
    )
    generator = stub_generator("  本店牛肉麵湯頭濃郁，服務親切。  ")
    result = make_pipeline(store, generator).run("r1")

    assert store.requested == ["r1"]
    assert result.summary == "本店牛肉麵湯頭濃郁，服務親切。"
    assert result.review_count == 3
    assert isinstance(result.analysis_time, datetime)
    assert result.analysis_time.tzinfo is not None
    assert len(generator.prompts) == 1
    assert generator.prompts[0].endswith("顧客留言：\nGreat noodles\n湯頭很讚")
    assert "GUIDED_DINING_SOLO" not in generator.prompts[0]


def test_english_summary_is_translated(stub_generator, make_pipeline):
    store = FakeStore([_doc({"stringValue": "Great noodles"})])
    generator = stub_generator("The noodles are great.", "麵條很棒。")
    result = make_pipeline(store, generator).run("r1")
    assert result.summary == "麵條很棒。"
    assert len(generator.prompts) == 2


def test_no_documents_stops_cleanly(stub_generator, make_pipeline):
    generator = stub_generator()
    with pytest.raises(RetrievalEmpty):
        make_pipeline(FakeStore([]), generator).run("r1")
    assert generator.prompts == []


def test_no_usable_text_stops_cleanly(stub_generator, make_pipeline):
    store = FakeStore(
        [_doc({"arrayValue": {"values": [{"stringValue": "GUIDED_DINING_GROUP"}]}})]
    )
    generator = stub_generator()
    with pytest.raises(RetrievalEmpty):
        make_pipeline(store, generator).run("r1")
    assert generator.prompts == []


def test_store_failure_propagates(stub_generator, make_pipeline):
    store = FakeStore(error=RetrievalFailed(403, "denied"))
    with pytest.raises(RetrievalFailed):
        make_pipeline(store, stub_generator()).run("r1")


def test_generation_failure_propagates(stub_generator, make_pipeline):
    store = FakeStore([_doc({"stringValue": "Great noodles"})])
    with pytest.raises(GenerationFailed):
        make_pipeline(store, stub_generator(GenerationFailed(500, "boom"))).run("r1")


def test_summary_result_to_dict():
    result = SummaryResult(
        summary="摘要", analysis_time=datetime.fromisoformat("2025-05-01T12:00:00+08:00")
    )
    assert result.to_dict() == {
        "analysis_time": "2025-05-01T12:00:00+08:00",
        "summary": "摘要",
    }
