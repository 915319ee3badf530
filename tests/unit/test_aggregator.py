"""Unit tests for report aggregation."""

from datetime import datetime, timezone

import pytest

from tagbook.contexts.aggregation import clamp_samples, prepare_report_data, required_asset_filenames
from tagbook.contexts.intake import Category, ClassificationRecord, ReportRequest

CATS = Category(id="c1", name="Cats")
DOGS = Category(id="c2", name="Dogs")
BIRDS = Category(id="c3", name="Birds")

UPLOADS = [f"img{i:02d}.jpg" for i in range(1, 11)]


def classify(category, *image_numbers):
    return [ClassificationRecord(f"img{n:02d}.jpg", category.id) for n in image_numbers]


def scenario_classifications():
    return classify(CATS, 1, 2, 3, 4) + classify(DOGS, 5, 6, 7)


@pytest.mark.unit
def test_ten_uploads_two_categories():
    """10 uploads, Cats 4, Dogs 3, 2 samples per category."""
    report = prepare_report_data(
        ReportRequest("Scenario", 2), [CATS, DOGS], scenario_classifications(), UPLOADS
    )

    assert report.total_images == 10
    assert report.classified_images == 7
    assert report.unclassified_images == 3

    cats, dogs = report.category_stats
    assert (cats.category_name, cats.count) == ("Cats", 4)
    assert (dogs.category_name, dogs.count) == ("Dogs", 3)
    assert cats.percentage == pytest.approx(40.0)
    assert dogs.percentage == pytest.approx(30.0)
    assert cats.sample_image_identifiers == ("img01.jpg", "img02.jpg")
    assert dogs.sample_image_identifiers == ("img05.jpg", "img06.jpg")


@pytest.mark.unit
def test_count_invariant_and_conservation():
    """total = classified + unclassified, and category counts sum to the classifications."""
    classifications = scenario_classifications() + classify(BIRDS, 8)
    report = prepare_report_data(ReportRequest("t", 3), [CATS, DOGS, BIRDS], classifications, UPLOADS)

    assert report.total_images == report.classified_images + report.unclassified_images
    assert sum(stat.count for stat in report.category_stats) == len(classifications)


@pytest.mark.unit
def test_percentages_within_bounds():
    report = prepare_report_data(
        ReportRequest("t", 3), [CATS, DOGS, BIRDS], scenario_classifications(), UPLOADS
    )

    for stat in report.category_stats:
        assert 0.0 <= stat.percentage <= 100.0


@pytest.mark.unit
@pytest.mark.parametrize("samples", [1, 2, 3, 25])
def test_sample_cap(samples):
    """Samples are capped, distinct and drawn from the category's own images."""
    classifications = classify(CATS, *range(1, 11)) + classify(DOGS, 1, 2)
    report = prepare_report_data(ReportRequest("t", samples), [CATS, DOGS], classifications, UPLOADS)

    for stat, category in zip(report.category_stats, [CATS, DOGS]):
        own_images = {c.image_identifier for c in classifications if c.category_id == category.id}
        assert len(stat.sample_image_identifiers) <= clamp_samples(samples)
        assert len(set(stat.sample_image_identifiers)) == len(stat.sample_image_identifiers)
        assert set(stat.sample_image_identifiers) <= own_images


@pytest.mark.unit
def test_samples_keep_store_order():
    classifications = classify(CATS, 9, 3, 7, 1)
    report = prepare_report_data(ReportRequest("t", 3), [CATS], classifications, UPLOADS)

    assert report.category_stats[0].sample_image_identifiers == ("img09.jpg", "img03.jpg", "img07.jpg")


@pytest.mark.unit
def test_zero_samples_still_computes_one_sample_internally():
    """A request for 0 samples keeps 0 on ReportData but computes one sample per category."""
    report = prepare_report_data(
        ReportRequest("t", 0), [CATS, DOGS], scenario_classifications(), UPLOADS
    )

    assert report.samples_per_category == 0
    assert [len(stat.sample_image_identifiers) for stat in report.category_stats] == [1, 1]
    assert required_asset_filenames(report) == []


@pytest.mark.unit
@pytest.mark.parametrize(
    "requested, expected",
    [(-5, 1), (0, 1), (1, 1), (12, 12), (25, 25), (26, 25), (1000, 25)],
)
def test_clamp_samples(requested, expected):
    assert clamp_samples(requested) == expected


@pytest.mark.unit
def test_no_uploads_gives_zero_percentages():
    report = prepare_report_data(ReportRequest("t", 3), [CATS, DOGS], [], [])

    assert report.total_images == 0
    assert [stat.percentage for stat in report.category_stats] == [0.0, 0.0]
    assert [stat.sample_image_identifiers for stat in report.category_stats] == [(), ()]


@pytest.mark.unit
def test_classifications_outnumbering_uploads():
    """Stale classifications can drive the unclassified count negative; not an error."""
    classifications = scenario_classifications()
    report = prepare_report_data(ReportRequest("t", 3), [CATS, DOGS], classifications, UPLOADS[:5])

    assert report.classified_images == 7
    assert report.unclassified_images == -2
    assert report.category_stats[0].percentage == pytest.approx(80.0)


@pytest.mark.unit
def test_classified_images_counts_distinct_identifiers():
    classifications = classify(CATS, 1, 2) + classify(DOGS, 2)
    report = prepare_report_data(ReportRequest("t", 3), [CATS, DOGS], classifications, UPLOADS)

    assert report.classified_images == 2
    assert report.unclassified_images == 8


@pytest.mark.unit
def test_categories_keep_caller_order_and_include_empty_ones():
    report = prepare_report_data(
        ReportRequest("t", 3), [DOGS, BIRDS, CATS], scenario_classifications(), UPLOADS
    )

    assert [stat.category_name for stat in report.category_stats] == ["Dogs", "Birds", "Cats"]
    assert report.category_stats[1].count == 0
    assert report.category_stats[1].percentage == 0.0


@pytest.mark.unit
def test_classifications_for_unknown_categories_are_not_counted():
    classifications = scenario_classifications() + [ClassificationRecord("img09.jpg", "deleted")]
    report = prepare_report_data(ReportRequest("t", 3), [CATS, DOGS], classifications, UPLOADS)

    assert [stat.count for stat in report.category_stats] == [4, 3]
    assert report.classified_images == 8


@pytest.mark.unit
def test_report_carries_request_and_date():
    report_date = datetime(2025, 5, 1, 9, 30, tzinfo=timezone.utc)
    report = prepare_report_data(
        ReportRequest("Spring review", 4), [CATS], [], UPLOADS, report_date=report_date
    )

    assert report.title == "Spring review"
    assert report.samples_per_category == 4
    assert report.report_date == report_date


@pytest.mark.unit
def test_report_date_defaults_to_utc_now():
    report = prepare_report_data(ReportRequest("t", 3), [], [], [])

    assert report.report_date.tzinfo is not None
    assert report.category_stats == ()


@pytest.mark.unit
def test_required_asset_filenames_are_distinct():
    """An image sampled by two categories is staged once."""
    classifications = classify(CATS, 1, 2) + classify(DOGS, 2, 3)
    report = prepare_report_data(ReportRequest("t", 2), [CATS, DOGS], classifications, UPLOADS)

    assert required_asset_filenames(report) == ["img01.jpg", "img02.jpg", "img03.jpg"]
