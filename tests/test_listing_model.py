from __future__ import annotations

import itertools

import pytest

from app.api.models import ListingPage, ModRecord, OverviewPage, SortOrder
from app.listing.model import ListingModel, matches_query


def test_sort_by_stars_descending(make_record) -> None:
    records = [make_record(stars=3), make_record(stars=10), make_record(stars=1)]
    model = ListingModel(records=tuple(records), sort=SortOrder.stars)
    assert [r.stars for r in model.visible_items()] == [10, 3, 1]


def test_sort_by_commit_descending(make_record) -> None:
    old = make_record(date_tt=100.0)
    new = make_record(date_tt=300.0)
    mid = make_record(date_tt=200.0)
    model = ListingModel(records=(old, new, mid))
    assert model.sort == SortOrder.commit
    assert model.visible_items() == [new, mid, old]


def test_ties_keep_insertion_order(make_record) -> None:
    a = make_record(stars=5)
    b = make_record(stars=5)
    c = make_record(stars=7)
    d = make_record(stars=5)
    model = ListingModel(records=(a, b, c, d), sort=SortOrder.stars)
    assert model.visible_items() == [c, a, b, d]


def test_fixture_dataset_orders(dataset: tuple[ModRecord, ...]) -> None:
    model = ListingModel(records=dataset, sort=SortOrder.stars)
    assert [r.repo for r in model.visible_items()] == [
        "Anuke/ExampleMod",
        "Redwood/IronWorks",
        "Skye/Tied",
        "someone/iron-only",
        "Zeta/NoStars",
    ]

    model.set_sort(SortOrder.commit)
    assert [r.repo for r in model.visible_items()][:2] == ["Redwood/IronWorks", "Anuke/ExampleMod"]


def test_filter_requires_every_word_somewhere(make_record) -> None:
    both = make_record(desc="Adds Iron smelting", author="Redwood")
    only_iron = make_record(desc="more iron", author="someone")
    model = ListingModel(records=(both, only_iron))

    model.set_filter("iron red")
    assert model.visible_items() == [both]

    model.set_filter("IRON")
    assert set(r.repo for r in model.visible_items()) == {both.repo, only_iron.repo}


def test_filter_searches_every_field(make_record) -> None:
    record = make_record(
        repo="alpha/beta",
        author="gamma",
        desc="delta",
        readme="epsilon text",
        contents=["blocks", "units"],
        assets=["sprites"],
    )
    for word in ["alpha", "BETA", "gamma", "delta", "epsilon", "blocks units", "sprites", "a/b"]:
        assert matches_query(record, word), word
    assert not matches_query(record, "zeta")
    # Name is not searched.
    assert not matches_query(make_record(name="Unique Name"), "unique")


def test_tag_lists_are_joined_with_spaces(make_record) -> None:
    record = make_record(contents=["blocks", "units"])
    assert matches_query(record, "ks un")


@pytest.mark.parametrize("query", ["", "   ", "\t\n"])
def test_empty_filter_matches_everything(dataset: tuple[ModRecord, ...], query: str) -> None:
    model = ListingModel(records=dataset, default_max_count=100)
    model.set_filter(query)
    assert len(model.visible_items()) == len(dataset)


def test_filter_is_monotonic_in_words(dataset: tuple[ModRecord, ...]) -> None:
    words = ["iron", "red", "units", "sprites", "a"]
    for n in range(len(words)):
        for q1 in itertools.combinations(words, n):
            for extra in words:
                q2 = q1 + (extra,)
                m1 = {r.repo for r in dataset if matches_query(r, " ".join(q1))}
                m2 = {r.repo for r in dataset if matches_query(r, " ".join(q2))}
                assert m2 <= m1


def test_cap_truncates_and_resets(make_record) -> None:
    records = tuple(make_record(stars=i) for i in range(20))
    model = ListingModel(records=records)
    assert len(model.visible_items()) == 8

    model.grow()
    model.grow()
    assert model.max_count == 32
    assert len(model.visible_items()) == 20

    model.set_sort(SortOrder.stars)
    assert model.max_count == 8

    model.grow()
    model.set_filter("owner")
    assert model.max_count == 8


def test_navigation_resets_cap_only_for_listing(make_record) -> None:
    model = ListingModel(records=(make_record(),))
    model.grow()
    model.navigate(OverviewPage(mod_id="owner1--mod1"))
    assert model.max_count == 16
    assert model.current_record() is not None

    model.navigate(ListingPage())
    assert model.max_count == 8
    assert model.current_record() is None


def test_unknown_overview_id_has_no_record(make_record) -> None:
    model = ListingModel(records=(make_record(),), page=OverviewPage(mod_id="nobody--nothing"))
    assert model.current_record() is None


def test_duplicate_repositories_are_dropped(make_record) -> None:
    first = make_record(repo="a/b", stars=1)
    again = make_record(repo="a/b", stars=99)
    model = ListingModel(records=(first, again))
    assert model.visible_items() == [first]

    model.replace_records([again, first])
    assert model.visible_items() == [again]


def test_reveal_all_uses_record_count(make_record) -> None:
    model = ListingModel(records=tuple(make_record() for _ in range(11)))
    model.reveal_all()
    assert model.max_count == 11
    assert len(model.visible_items()) == 11


def test_visible_items_is_pure(dataset: tuple[ModRecord, ...]) -> None:
    model = ListingModel(records=dataset, query="units")
    assert model.visible_items() == model.visible_items()


def test_default_max_count_must_be_positive() -> None:
    with pytest.raises(ValueError):
        ListingModel(default_max_count=0)
