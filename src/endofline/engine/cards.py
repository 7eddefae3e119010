"""Card catalog and the two-step play protocol.

Every card offers `is_legal(context, target)` and `resolve(context, target)`.
Callers must only call `resolve` after `is_legal` returned True against the
same, unchanged context; `resolve` does not re-check and calling it on an
illegal play is a precondition violation (it may still debit and install).
"""

from __future__ import annotations

from typing import Callable, Protocol

from .board import Faction, Installation, Territory
from .context import GameContext
from .types import (
    ANARCH,
    CRIMINAL,
    NBN,
    WEYLAND,
    CardDefinition,
    CardType,
    Cost,
    DamageAuraEffect,
    FixedCost,
    InfluenceEffect,
    RunnerTagEffect,
    SecurityIncreaseEffect,
    SecurityReductionEffect,
    VariableCost,
)


class Card(Protocol):
    @property
    def id(self) -> str: ...

    @property
    def name(self) -> str: ...

    @property
    def type(self) -> CardType: ...

    @property
    def faction(self) -> str: ...

    @property
    def cost(self) -> Cost: ...

    def is_legal(self, context: GameContext, target: Territory | None) -> bool: ...

    def resolve(self, context: GameContext, target: Territory | None) -> bool: ...


class BaseCard:
    """Shared identity accessors; plays nothing on its own."""

    definition: CardDefinition

    @property
    def id(self) -> str:
        return self.definition.id

    @property
    def name(self) -> str:
        return self.definition.name

    @property
    def type(self) -> CardType:
        return self.definition.type

    @property
    def faction(self) -> str:
        return self.definition.faction

    @property
    def cost(self) -> Cost:
        return self.definition.cost

    def is_legal(self, context: GameContext, target: Territory | None) -> bool:
        return False

    def resolve(self, context: GameContext, target: Territory | None) -> bool:
        return False

    # helpers for concrete cards

    def _caster(self, context: GameContext) -> Faction | None:
        return context.get_faction(self.faction)

    def _fixed_amount(self) -> int:
        cost = self.cost
        assert isinstance(cost, FixedCost)
        return cost.amount

    def _can_afford(self, context: GameContext) -> bool:
        caster = self._caster(context)
        return caster is not None and caster.resource("credits") >= self._fixed_amount()

    def _pay(self, context: GameContext) -> None:
        context.modify_resource(self.faction, "credits", -self._fixed_amount())

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r})"


CARD_REGISTRY: dict[str, Callable[[], Card]] = {}


def register(cls: type[BaseCard]) -> type[BaseCard]:
    CARD_REGISTRY[cls.definition.id] = cls
    return cls


def create_card(card_id: str) -> Card | None:
    factory = CARD_REGISTRY.get(card_id)
    if factory is None:
        return None
    return factory()


def catalog_ids() -> list[str]:
    return sorted(CARD_REGISTRY)


# -- runner cards ------------------------------------------------------------


@register
class BackdoorAccess(BaseCard):
    """One-turn stealth install that lowers security on the target."""

    definition = CardDefinition(
        id="backdoor_access", name="Backdoor Access", type="event", faction=CRIMINAL, cost=FixedCost(2)
    )

    def is_legal(self, context: GameContext, target: Territory | None) -> bool:
        return target is not None and self._can_afford(context)

    def resolve(self, context: GameContext, target: Territory | None) -> bool:
        assert target is not None
        self._pay(context)
        stealth = Installation(
            id=context.next_installation_id("backdoor_effect"),
            faction=CRIMINAL,
            type="stealth",
            duration=1,
            effects=[SecurityReductionEffect(kind="security_reduction", value=1)],
        )
        context.install_on_territory(target, stealth)
        return True


@register
class NetworkExpansion(BaseCard):
    definition = CardDefinition(
        id="network_expansion",
        name="Network Expansion",
        type="resource",
        faction=CRIMINAL,
        cost=FixedCost(3),
    )

    def is_legal(self, context: GameContext, target: Territory | None) -> bool:
        if target is None or not self._can_afford(context):
            return False
        return any(n.runner_influence() > 0 for n in context.neighbours(target))

    def resolve(self, context: GameContext, target: Territory | None) -> bool:
        assert target is not None
        self._pay(context)
        installation = Installation(
            id=context.next_installation_id("network_expansion"),
            faction=CRIMINAL,
            type="resource",
            effects=[InfluenceEffect(kind="territory_influence", value=-10)],
        )
        context.install_on_territory(target, installation)
        # The record above is bookkeeping; this is the mechanical effect.
        context.adjust_attribute(target, "corporate_influence", -10)
        return True


@register
class BankJob(BaseCard):
    definition = CardDefinition(
        id="bank_job", name="Bank Job", type="operation", faction=CRIMINAL, cost=FixedCost(2)
    )

    def is_legal(self, context: GameContext, target: Territory | None) -> bool:
        if target is None or not self._can_afford(context):
            return False
        return target.type == "corporate"

    def resolve(self, context: GameContext, target: Territory | None) -> bool:
        assert target is not None
        self._pay(context)
        context.modify_resource(CRIMINAL, "credits", target.attributes.resource_value * 2)
        context.adjust_attribute(target, "stability_index", -5)
        return True


@register
class Overclock(BaseCard):
    """Spend every credit held (X >= 1) to push corporate influence down by 5 per credit."""

    definition = CardDefinition(
        id="overclock", name="Overclock", type="program", faction=ANARCH, cost=VariableCost()
    )

    INFLUENCE_PER_CREDIT = 5

    def paid_amount(self, context: GameContext) -> int:
        caster = self._caster(context)
        return caster.resource("credits") if caster is not None else 0

    def is_legal(self, context: GameContext, target: Territory | None) -> bool:
        return target is not None and self.paid_amount(context) >= 1

    def resolve(self, context: GameContext, target: Territory | None) -> bool:
        assert target is not None
        x = self.paid_amount(context)
        context.modify_resource(ANARCH, "credits", -x)
        shift = -self.INFLUENCE_PER_CREDIT * x
        installation = Installation(
            id=context.next_installation_id("overclock"),
            faction=ANARCH,
            type="program",
            effects=[InfluenceEffect(kind="territory_influence", value=shift)],
        )
        context.install_on_territory(target, installation)
        context.adjust_attribute(target, "corporate_influence", shift)
        return True


# -- corporation cards -------------------------------------------------------


@register
class SurveillanceGrid(BaseCard):
    definition = CardDefinition(
        id="surveillance_grid",
        name="Surveillance Grid",
        type="infrastructure",
        faction=NBN,
        cost=FixedCost(3),
    )

    def is_legal(self, context: GameContext, target: Territory | None) -> bool:
        return target is not None and self._can_afford(context)

    def resolve(self, context: GameContext, target: Territory | None) -> bool:
        assert target is not None
        self._pay(context)
        context.adjust_attribute(target, "security_level", 1)
        # Tagging runners that enter is left to turn logic reading this record.
        installation = Installation(
            id=context.next_installation_id("surveillance_grid"),
            faction=NBN,
            type="infrastructure",
            effects=[
                SecurityIncreaseEffect(kind="security_increase", value=1),
                RunnerTagEffect(kind="runner_tag", value=1),
            ],
        )
        context.install_on_territory(target, installation)
        return True


@register
class ScorchedEarth(BaseCard):
    """Damage every runner, cripple runner installations on the target, and seize it."""

    definition = CardDefinition(
        id="scorched_earth",
        name="Scorched Earth",
        type="operation",
        faction=WEYLAND,
        cost=FixedCost(4),
    )

    RUNNER_DAMAGE = 3

    def is_legal(self, context: GameContext, target: Territory | None) -> bool:
        if target is None or not self._can_afford(context):
            return False
        return context.any_runner_tagged()

    def resolve(self, context: GameContext, target: Territory | None) -> bool:
        assert target is not None
        self._pay(context)

        for runner in context.factions_in_camp("runner"):
            context.damage_runner(runner.id, self.RUNNER_DAMAGE)

        for inst in target.installations_of_camp("runner"):
            context.damage_installation(target, inst)

        context.adjust_attribute(target, "stability_index", -10)
        context.adjust_attribute(target, "resource_value", -1, floor=1)
        context.adjust_attribute(target, "population", -1, floor=1)
        context.adjust_attribute(target, "corporate_influence", 15)

        aftermath = Installation(
            id=context.next_installation_id("scorched_earth_aftermath"),
            faction=WEYLAND,
            type="operation",
            duration=2,
            effects=[
                InfluenceEffect(kind="territory_influence", value=15),
                DamageAuraEffect(kind="runner_damage_aura", value=1),
            ],
        )
        context.install_on_territory(target, aftermath)
        return True
