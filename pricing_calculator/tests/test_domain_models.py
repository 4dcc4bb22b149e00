"""
Tests for the catalog and estimation domain models.
"""

import pytest
from decimal import Decimal

from pricing_calculator.domain.estimation_models import AddonCost, CostEstimation, RuntimeCost
from pricing_calculator.domain.pricing_models import Flavor, Instance


def assert_totals_match_line_items(estimation):
    addon_total = sum((ac.cost for ac in estimation.addon_costs), Decimal("0"))
    assert estimation.min_monthly_cost == sum(
        (rc.min_cost for rc in estimation.runtime_costs), Decimal("0")
    ) + addon_total
    assert estimation.max_monthly_cost == sum(
        (rc.max_cost for rc in estimation.runtime_costs), Decimal("0")
    ) + addon_total


def test_flavor_monthly_price_uses_730_hours():
    """Monthly price is the hourly price times 730."""
    flavor = Flavor("XS", 1024, 1, Decimal("0.02"))
    assert flavor.monthly_price == Decimal("14.6")


def test_flavor_high_memory_threshold():
    """Only flavors above 4096 MB count as high memory."""
    assert not Flavor("M", 4096, 2, Decimal("0.1")).is_high_memory
    assert Flavor("L", 8192, 4, Decimal("0.2")).is_high_memory


def test_instance_prices_ignore_unavailable_flavors(sample_instances):
    """Min/max monthly price only consider available flavors."""
    node = sample_instances[0]

    assert [f.name for f in node.available_flavors] == ["pico", "XS"]
    assert node.min_monthly_price == Decimal("0.0029") * 730
    assert node.max_monthly_price == Decimal("0.0233") * 730


def test_instance_without_available_flavors_prices_at_zero():
    """An instance with nothing available reports 0 for both bounds."""
    instance = Instance(type="java", name="Java", version="21")
    instance.add_flavor(Flavor("S", 2048, 2, Decimal("0.05"), available=False))

    assert instance.min_monthly_price == Decimal("0")
    assert instance.max_monthly_price == Decimal("0")


def test_instance_keeps_flavor_insertion_order():
    """Flavors are kept in the order they were added, not sorted."""
    instance = Instance(type="php", name="PHP", version="8")
    for name in ("XL", "nano", "M"):
        instance.add_flavor(Flavor(name, 512, 1, Decimal("0.01")))

    assert [f.name for f in instance.flavors] == ["XL", "nano", "M"]
    assert instance.find_flavor_by_name("nano").name == "nano"
    assert instance.find_flavor_by_name("missing") is None


def test_line_item_ids_derive_from_inputs():
    """Runtime and addon ids/display names are derived from their parts."""
    runtime = RuntimeCost.for_flavor("XS", "pico", Decimal("1"), Decimal("2"))
    addon = AddonCost.for_plan("redis", "s")

    assert runtime.runtime_id == "XS-pico"
    assert runtime.display_name == "XS (pico)"
    assert addon.addon_id == "redis-s"
    assert addon.display_name == "redis (s)"
    assert addon.cost == Decimal("0")


def test_negative_line_item_costs_are_rejected():
    with pytest.raises(ValueError):
        RuntimeCost.for_flavor("XS", "pico", Decimal("-1"), Decimal("2"))
    with pytest.raises(ValueError):
        AddonCost.for_plan("redis", "s", Decimal("-0.5"))


@pytest.mark.parametrize("amount", [Decimal("Infinity"), Decimal("-Infinity"), Decimal("NaN")])
def test_non_finite_line_item_costs_are_rejected(amount):
    with pytest.raises(ValueError):
        RuntimeCost.for_flavor("XS", "pico", Decimal("1"), amount)
    with pytest.raises(ValueError):
        AddonCost.for_plan("redis", "s", amount)


@pytest.mark.parametrize("memory_mb, cpu_count, price", [
    (-1, 1, Decimal("0.01")),
    (512, -1, Decimal("0.01")),
    (512, 1, Decimal("-0.01")),
    (512, 1, Decimal("Infinity")),
])
def test_flavor_rejects_negative_or_non_finite_values(memory_mb, cpu_count, price):
    with pytest.raises(ValueError):
        Flavor("XS", memory_mb, cpu_count, price)


def test_instance_copy_has_its_own_flavor_list():
    instance = Instance("node", "Node.js", "20")
    instance.add_flavor(Flavor("XS", 1024, 1, Decimal("0.02")))

    duplicate = instance.copy()
    duplicate.flavors.clear()

    assert duplicate == Instance("node", "Node.js", "20")
    assert [flavor.name for flavor in instance.flavors] == ["XS"]


def test_new_estimation_is_empty_with_fresh_id():
    """A new estimation starts with zero totals and a unique id."""
    first = CostEstimation(project_id="project-1")
    second = CostEstimation(project_id="project-1")

    assert first.id and second.id
    assert first.id != second.id
    assert first.min_monthly_cost == Decimal("0")
    assert first.max_monthly_cost == Decimal("0")
    assert first.runtime_costs == ()
    assert first.addon_costs == ()


def test_totals_hold_after_every_mutation():
    """Totals equal the sum of line items after each append."""
    estimation = CostEstimation(project_id="project-1")
    assert_totals_match_line_items(estimation)

    estimation.add_runtime_cost(RuntimeCost.for_flavor("node", "XS", Decimal("10"), Decimal("30")))
    assert_totals_match_line_items(estimation)

    estimation.add_addon_cost(AddonCost.for_plan("pg", "dev", Decimal("5")))
    assert_totals_match_line_items(estimation)

    estimation.add_runtime_cost(RuntimeCost.for_flavor("php", "S", Decimal("2.5"), Decimal("2.5")))
    assert_totals_match_line_items(estimation)

    assert estimation.min_monthly_cost == Decimal("17.5")
    assert estimation.max_monthly_cost == Decimal("37.5")
    assert estimation.total_runtime_min_cost == Decimal("12.5")
    assert estimation.total_runtime_max_cost == Decimal("32.5")
    assert estimation.total_addon_cost == Decimal("5")


def test_totals_and_id_cannot_be_assigned():
    """Derived totals and the id are read-only."""
    estimation = CostEstimation(project_id="project-1")

    with pytest.raises(AttributeError):
        estimation.min_monthly_cost = Decimal("100")
    with pytest.raises(AttributeError):
        estimation.id = "other"


def test_line_item_views_do_not_bypass_recalculation():
    """The exposed line items are read-only views."""
    estimation = CostEstimation(project_id="project-1")

    with pytest.raises(AttributeError):
        estimation.runtime_costs.append(RuntimeCost.for_flavor("a", "b", Decimal("1"), Decimal("1")))


def test_copy_is_equal_and_independent():
    """A copy is deep-equal and later appends do not leak between them."""
    original = CostEstimation(project_id="project-1")
    original.add_runtime_cost(RuntimeCost.for_flavor("node", "XS", Decimal("10"), Decimal("30")))

    duplicate = original.copy()
    assert duplicate == original
    assert duplicate is not original
    assert duplicate.runtime_costs[0] is not original.runtime_costs[0]

    duplicate.add_addon_cost(AddonCost.for_plan("pg", "dev", Decimal("5")))
    assert len(original.addon_costs) == 0
    assert original.min_monthly_cost == Decimal("10")
    assert duplicate != original


def test_from_dict_rederives_totals():
    """Totals in a payload are ignored and recomputed from line items."""
    payload = {
        "id": "estimation-1",
        "project_id": "project-1",
        "min_monthly_cost": 999.0,
        "max_monthly_cost": 999.0,
        "runtime_costs": [
            {"runtime_id": "XS-pico", "display_name": "XS (pico)", "min_cost": 14.6, "max_cost": 43.8},
        ],
        "addon_costs": [
            {"addon_id": "redis-s", "display_name": "redis (s)", "cost": 0},
        ],
    }

    estimation = CostEstimation.from_dict(payload)

    assert estimation.id == "estimation-1"
    assert estimation.min_monthly_cost == Decimal("14.6")
    assert estimation.max_monthly_cost == Decimal("43.8")
    assert estimation.to_dict()["runtime_costs"][0]["max_cost"] == 43.8


def test_from_dict_without_id_generates_one():
    estimation = CostEstimation.from_dict({"project_id": "project-1"})
    assert estimation.id
    assert estimation.project_id == "project-1"
