"""
Unit tests for equation generation and effect application.

Every generated equation is checked against the stored answer by
evaluating the displayed text, so what the player sees is always what
the duel expects.
"""

import pytest

from nerdduel.core.data import ActionKind
from nerdduel.game.combat import EquationResolver, resolve
from nerdduel.game.entities import NERD_REGISTRY, spawn
from tests.conftest import make_template


def evaluate(equation_text):
    return eval(equation_text, {"__builtins__": {}}, {})


@pytest.fixture
def resolver():
    return EquationResolver(critical_factor=2)


@pytest.fixture
def alpha():
    return spawn(make_template("Alpha", health=100, values=(6, 2, 4, 2)))


@pytest.fixture
def beta():
    return spawn(make_template("Beta", health=50, values=(3, 1, 1, 1)))


class TestEquationText:

    def test_katana_against_isaac(self):
        isaac = NERD_REGISTRY.get("Isaac")
        actor = spawn(isaac)
        target = spawn(isaac, name="Isaac (2)")

        equation, answer = resolve(actor, target, 0, critical=False)

        assert equation == "100 - 6 * 10 * 1"
        assert answer == 40

    def test_damage(self, resolver, alpha, beta):
        resolution = resolver.resolve(alpha, beta, 0, critical=False)

        assert resolution.equation_text == "50 - 6 * 10 * 1"
        assert resolution.result_value == -10
        assert resolution.kind == ActionKind.DAMAGE

    def test_heal(self, resolver, alpha, beta):
        resolution = resolver.resolve(alpha, beta, 1, critical=False)

        assert resolution.equation_text == "100 + 2 * 10 * 1"
        assert resolution.result_value == 120

    def test_weaken(self, resolver, alpha, beta):
        resolution = resolver.resolve(alpha, beta, 2, critical=False)

        assert resolution.equation_text == "10 - 4 * 1"
        assert resolution.result_value == 6

    def test_strengthen(self, resolver, alpha, beta):
        resolution = resolver.resolve(alpha, beta, 3, critical=False)

        assert resolution.equation_text == "10 + 2 * 1"
        assert resolution.result_value == 12

    def test_negative_operands_are_parenthesized(self, resolver, alpha, beta):
        alpha.set_multiplier(-2)
        beta.set_health(-5)

        resolution = resolver.resolve(alpha, beta, 0, critical=False)

        assert resolution.equation_text == "(-5) - 6 * (-2) * 1"
        assert resolution.result_value == 7


class TestCriticalScaling:

    def test_critical_doubles_damage(self, resolver, alpha, beta):
        normal = resolver.resolve(alpha, beta, 0, critical=False)
        critical = resolver.resolve(alpha, beta, 0, critical=True)

        assert critical.equation_text == "50 - 6 * 10 * 2"
        assert beta.health - critical.result_value == 2 * (beta.health - normal.result_value)

    def test_critical_scales_multiplier_changes(self, resolver, alpha, beta):
        weaken = resolver.resolve(alpha, beta, 2, critical=True)
        strengthen = resolver.resolve(alpha, beta, 3, critical=True)

        assert weaken.equation_text == "10 - 4 * 2"
        assert weaken.result_value == 2
        assert strengthen.equation_text == "10 + 2 * 2"
        assert strengthen.result_value == 14

    def test_factor_for(self):
        resolver = EquationResolver(critical_factor=3)
        assert resolver.factor_for(True) == 3
        assert resolver.factor_for(False) == 1

    def test_factor_must_be_positive(self):
        with pytest.raises(ValueError):
            EquationResolver(critical_factor=0)


class TestResolverProperties:

    @pytest.mark.parametrize("action_index", range(4))
    @pytest.mark.parametrize("critical", [False, True])
    @pytest.mark.parametrize("health, multiplier", [(100, 10), (1, 3), (-20, -4), (0, 0)])
    def test_displayed_equation_evaluates_to_answer(self, resolver, alpha, beta,
                                                     action_index, critical, health, multiplier):
        alpha.set_multiplier(multiplier)
        beta.set_health(health)
        beta.set_multiplier(multiplier)

        resolution = resolver.resolve(alpha, beta, action_index, critical)

        assert evaluate(resolution.equation_text) == resolution.result_value

    def test_deterministic(self, resolver, alpha, beta):
        first = resolver.resolve(alpha, beta, 0, critical=True)
        second = resolver.resolve(alpha, beta, 0, critical=True)
        assert first == second

    def test_resolve_does_not_mutate(self, resolver, alpha, beta):
        resolver.resolve(alpha, beta, 0, critical=False)
        assert beta.health == 50
        assert alpha.health == 100

    @pytest.mark.parametrize("action_index", [-1, 4])
    def test_bad_action_index(self, resolver, alpha, beta, action_index):
        with pytest.raises(IndexError):
            resolver.resolve(alpha, beta, action_index, critical=False)


class TestApply:

    @pytest.mark.parametrize(
        "action_index, affected, attribute, expected",
        [
            (0, "target", "health", -10),
            (1, "actor", "health", 120),
            (2, "target", "multiplier", 6),
            (3, "actor", "multiplier", 12),
        ],
    )
    def test_apply_targets_the_right_nerd(self, resolver, alpha, beta,
                                          action_index, affected, attribute, expected):
        resolution = resolver.resolve(alpha, beta, action_index, critical=False)

        returned = resolver.apply(alpha, beta, resolution)

        nerd = alpha if affected == "actor" else beta
        assert returned is nerd
        assert getattr(nerd, attribute) == expected
