"""
Tests for the classifier: categories, counts, filter, short-name heuristic.
"""

from sillydeps.core.models.dependency import IndirectDependency, NormalizedDependencySet
from sillydeps.core.models.result import OTHER_CATEGORY
from sillydeps.core.services.audit.catalog import Catalog
from sillydeps.core.services.audit.classifier import (
    DEFAULT_OTHER_SUGGESTION,
    Classifier,
    ShortNameHeuristic,
    classify,
)
from sillydeps.core.services.audit.tree_builder import build_dependency_set


def _catalog() -> Catalog:
    return Catalog.load({
        "padding": {"left-pad": "padStart"},
        "math": {"is-odd": "n % 2 === 1", "is-even": "n % 2 === 0"},
        "logging": {"console-log-level": "check the level yourself"},
    })


def _deps(direct=(), indirect=()) -> NormalizedDependencySet:
    return NormalizedDependencySet(
        direct=tuple(direct),
        indirect=tuple(IndirectDependency(name=n, parent=p) for n, p in indirect),
    )


class TestScenario:
    def test_reference_scenario(self, scenario_catalog, scenario_manifest, scenario_tree):
        dep_set = build_dependency_set(scenario_manifest, scenario_tree)
        result = classify(dep_set, scenario_catalog)

        assert result.direct_count == 1
        assert result.indirect_count == 0
        assert result.packages_by_kind.direct == ("left-pad",)
        assert result.packages_by_kind.indirect == ()

        [item] = result.by_category["padding"]
        assert item.name == "left-pad"
        assert item.kind == "direct"
        assert item.suggestion == "Use String.prototype.padStart"
        assert item.via is None

        # all unmatched names are <= 12 chars, so all are review candidates
        others = result.by_category[OTHER_CATEGORY]
        assert [(i.name, i.kind, i.via) for i in others] == [
            ("express", "direct", None),
            ("chalk", "indirect", "root"),
            ("ansi-styles", "indirect", "chalk"),
        ]

    def test_scenario_to_dict(self, scenario_catalog, scenario_manifest, scenario_tree):
        dep_set = build_dependency_set(scenario_manifest, scenario_tree)
        data = classify(dep_set, scenario_catalog).to_dict()
        assert data["by_category"]["padding"] == [{
            "name": "left-pad",
            "category": "padding",
            "suggestion": "Use String.prototype.padStart",
            "kind": "direct",
        }]
        assert data["by_category"]["other"][1]["via"] == "root"


class TestClassification:
    def test_every_category_present(self):
        result = classify(_deps(), _catalog())
        assert list(result.by_category) == ["padding", "math", "logging", OTHER_CATEGORY]
        assert not result.found

    def test_indirect_match_records_via(self):
        result = classify(_deps(indirect=[("is-odd", "is-number")]), _catalog())
        [item] = result.by_category["math"]
        assert item.kind == "indirect"
        assert item.via == "is-number"
        assert result.indirect_count == 1
        assert result.packages_by_kind.indirect == ("is-odd",)

    def test_direct_before_indirect(self):
        result = classify(_deps(direct=["is-even"], indirect=[("is-odd", "root")]), _catalog())
        assert [i.name for i in result.by_category["math"]] == ["is-even", "is-odd"]

    def test_count_invariant(self):
        result = classify(
            _deps(
                direct=["left-pad", "is-odd", "react", "a-very-long-package-name"],
                indirect=[("is-even", "react"), ("console-log-level", "winston"), ("tiny", "react")],
            ),
            _catalog(),
        )
        real = sum(len(items) for c, items in result.by_category.items() if c != OTHER_CATEGORY)
        assert result.direct_count + result.indirect_count == real == 4
        assert result.total == 4

    def test_long_unmatched_name_dropped(self):
        result = classify(_deps(direct=["a-very-long-package-name"]), _catalog())
        assert result.by_category[OTHER_CATEGORY] == ()
        assert not result.found

    def test_threshold_is_inclusive(self):
        twelve = "abcdefghijkl"
        thirteen = "abcdefghijklm"
        result = classify(_deps(direct=[twelve, thirteen]), _catalog())
        assert [i.name for i in result.by_category[OTHER_CATEGORY]] == [twelve]

    def test_other_does_not_count(self):
        result = classify(_deps(direct=["react"]), _catalog())
        assert result.direct_count == 0
        assert result.packages_by_kind.direct == ()
        assert result.by_category[OTHER_CATEGORY][0].suggestion == DEFAULT_OTHER_SUGGESTION
        assert result.found

    def test_disjoint_packages_by_kind(self, scenario_catalog, scenario_manifest):
        tree = {"dependencies": {"express": {"dependencies": {"left-pad": {}}}}}
        result = classify(build_dependency_set(scenario_manifest, tree), scenario_catalog)
        assert not set(result.packages_by_kind.direct) & set(result.packages_by_kind.indirect)

    def test_idempotent(self):
        catalog = _catalog()
        deps = _deps(direct=["left-pad", "react"], indirect=[("is-odd", "react")])
        first = classify(deps, catalog, "math")
        second = classify(deps, catalog, "math")
        assert first == second
        assert first.to_dict() == second.to_dict()


class TestCategoryFilter:
    def test_only_requested_category(self):
        deps = _deps(
            direct=["left-pad", "console-log-level", "react"],
            indirect=[("is-odd", "react")],
        )
        result = classify(deps, _catalog(), "logging")
        non_empty = result.non_empty_categories()
        assert list(non_empty) == ["logging"]
        assert result.direct_count == 1
        assert result.indirect_count == 0
        assert result.packages_by_kind.direct == ("console-log-level",)

    def test_filtered_out_match_not_in_other(self):
        result = classify(_deps(direct=["is-odd"]), _catalog(), OTHER_CATEGORY)
        assert result.by_category[OTHER_CATEGORY] == ()
        assert result.by_category["math"] == ()

    def test_other_filter(self):
        result = classify(_deps(direct=["left-pad", "react"]), _catalog(), OTHER_CATEGORY)
        assert list(result.non_empty_categories()) == [OTHER_CATEGORY]
        assert result.direct_count == 0

    def test_unknown_filter_finds_nothing(self):
        result = classify(_deps(direct=["left-pad", "react"]), _catalog(), "nope")
        assert not result.found
        assert result.total == 0

    def test_empty_filter_means_no_filter(self):
        result = classify(_deps(direct=["left-pad"]), _catalog(), "")
        assert result.direct_count == 1


class TestClassifierOptions:
    def test_custom_threshold(self):
        classifier = Classifier(candidate=ShortNameHeuristic(3))
        result = classifier.classify(_deps(direct=["abc", "abcd"]), _catalog())
        assert [i.name for i in result.by_category[OTHER_CATEGORY]] == ["abc"]

    def test_custom_candidate(self):
        classifier = Classifier(candidate=lambda name: name.startswith("is-"))
        result = classifier.classify(_deps(direct=["is-whatever-long-name", "tiny"]), _catalog())
        assert [i.name for i in result.by_category[OTHER_CATEGORY]] == ["is-whatever-long-name"]

    def test_custom_other_suggestion(self):
        classifier = Classifier(other_suggestion="¿Hace falta?")
        result = classifier.classify(_deps(direct=["react"]), _catalog())
        assert result.by_category[OTHER_CATEGORY][0].suggestion == "¿Hace falta?"

    def test_default_heuristic(self):
        assert ShortNameHeuristic()("abcdefghijkl")
        assert not ShortNameHeuristic()("abcdefghijklm")
