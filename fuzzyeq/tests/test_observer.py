from fuzzyeq import is_equal, FuzzyComparer
from fuzzyeq.core.categories import Category
from fuzzyeq.core.observer import ComparisonEvent, NullObserver, RecordingObserver, summarize


def test_null_observer_is_the_default():
    comparer = FuzzyComparer()
    assert isinstance(comparer.observer, NullObserver)
    assert comparer.observer(ComparisonEvent(Category.NUMERIC, "$", "1", "2", False)) is None
    assert comparer.compare([1.0], [1.0]) is True


def test_recording_observer_queries():
    recorder = RecordingObserver()
    assert is_equal((1, 2, [3, 4]), (1, 9, [3, 5]), observer=recorder) is False
    assert [e.path for e in recorder.mismatches] == ["$[1]", "$[2][1]", "$[2]", "$"]
    assert recorder.first_mismatch.path == "$[1]"
    [inner] = recorder.by_path("$[2][1]")
    assert inner.left == "4"
    assert inner.right == "5"
    assert inner.depth == 2
    assert recorder.by_path("$[7]") == []
    recorder.clear()
    assert recorder.events == []
    assert recorder.first_mismatch is None


def test_summaries_are_bounded():
    text = summarize(list(range(1000)))
    assert len(text) < 60
    assert text.endswith("...]")
