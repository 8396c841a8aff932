import pytest

from bullet_improver.model import ACTION_VERBS, METRIC_PHRASES, Style, render_local


@pytest.mark.parametrize("style", list(Style))
def test_three_non_empty_variations_for_every_style(style):
    results = render_local("Built an internal reporting tool.", style)
    assert len(results) == 3
    assert all(isinstance(r, str) and r.strip() for r in results)


@pytest.mark.parametrize("style", list(Style) + ["Bogus"])
def test_render_is_deterministic(style):
    bullet = "Worked with the team to ship a new feature for the app"
    assert render_local(bullet, style) == render_local(bullet, style)


def test_verbs_are_picked_in_order():
    results = render_local("shipped search", "Unknown")
    assert results == ["Led shipped search", "Optimized shipped search", "Engineered shipped search"]


def test_trailing_whitespace_and_punctuation_removed():
    results = render_local("Shipped search!!.  ", "Unknown")
    assert results[0] == "Led Shipped search"


def test_technical_substitutions_are_case_insensitive():
    results = render_local("Built a mobile App feature with the Team", Style.TECHNICAL)
    assert results[0] == "Led Built a mobile distributed system microservice with the cross-functional team"


def test_technical_led_a_team_project():
    results = render_local("Led a team project", Style.TECHNICAL)
    assert all("cross-functional team" in r for r in results)


def test_concise_drops_stopwords_and_extra_spaces():
    results = render_local("Improved the onboarding flow for new users.", Style.CONCISE)
    assert results[0] == "Led Improved onboarding flow new users"
    assert "  " not in results[1]


def test_concise_keeps_stopwords_inside_words():
    results = render_local("Rebuilt theme tokens", Style.CONCISE)
    assert results[0] == "Led Rebuilt theme tokens"


def test_impactful_suffix():
    results = render_local("Migrated billing", Style.IMPACTFUL)
    assert all(r.endswith(" to drive measurable outcomes") for r in results)


def test_metrics_cycle_by_index():
    results = render_local("Migrated billing", Style.METRICS_FOCUSED)
    assert results == [
        f"{ACTION_VERBS[i]} Migrated billing — {METRIC_PHRASES[i]}" for i in range(3)
    ]


def test_style_accepts_plain_strings():
    assert render_local("Migrated billing", "Impactful") == render_local("Migrated billing", Style.IMPACTFUL)


@pytest.mark.parametrize(
    "value, expected",
    [
        ("Technical", Style.TECHNICAL),
        ("Metrics-Focused", Style.METRICS_FOCUSED),
        (Style.CONCISE, Style.CONCISE),
        ("technical", Style.IMPACTFUL),
        (None, Style.IMPACTFUL),
        (42, Style.IMPACTFUL),
        (["Concise"], Style.IMPACTFUL),
    ],
)
def test_style_resolution(value, expected):
    assert Style.resolve(value) is expected
