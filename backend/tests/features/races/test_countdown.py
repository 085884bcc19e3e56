"""
Tests for CountdownEngine.
"""

from next5racing.features.races import CountdownEngine

from conftest import NOW, make_race


class TestRender:

    def test_before_start(self):
        assert CountdownEngine().render(NOW + 125, NOW) == "2 min 5s"

    def test_just_started(self):
        assert CountdownEngine().render(NOW - 30, NOW) == "-30s"

    def test_started_over_a_minute_ago(self):
        assert CountdownEngine().render(NOW - 61, NOW) == "Race Started!"

    def test_missing_start(self):
        assert CountdownEngine().render(None, NOW) == "Time unknown"

    def test_same_inputs_same_output(self):
        engine = CountdownEngine()
        assert engine.render(NOW + 5, NOW) == engine.render(NOW + 5, NOW)

    def test_render_all(self):
        races = [make_race("a", NOW + 125), make_race("b", NOW - 30), make_race("c", None)]

        texts = CountdownEngine().render_all(races, NOW)

        assert texts == {"a": "2 min 5s", "b": "-30s", "c": "Time unknown"}


class TestAccessibilityLabel:

    def test_full_label(self):
        race = make_race("a", NOW + 125, meeting_name="Randwick", race_number=3)

        label = CountdownEngine().accessibility_label(race, NOW)

        assert label == "Race 3 at Randwick, starting in 2 min 5s"

    def test_fallbacks(self):
        race = make_race("a", None, meeting_name=None, race_number=None)

        label = CountdownEngine().accessibility_label(race, NOW)

        assert label == "Race Unknown at Unknown location, starting in Time unknown"
