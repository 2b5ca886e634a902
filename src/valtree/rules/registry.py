"""
Rule catalog for valtree.

The catalog maps rule names to rule implementations. The compiler consults it
while resolving each node's rule references, so an unknown name fails the
compile pass instead of the first validation call.
"""

from valtree.exceptions import RuleConflictError, UnknownRuleError
from valtree.rules.base import RuleLike


class RuleCatalog:
    """Registry of rules available to the compiler.

    Rules are:
    - Registered once under a unique name (re-registration is prohibited)
    - Shared by every schema compiled against the catalog
    - Resolved at compile time, never looked up by validation calls
    """

    def __init__(self, rules: dict[str, RuleLike] | None = None):
        self.rules: dict[str, RuleLike] = {}
        for name, rule in (rules or {}).items():
            self.register(name, rule)

    def register(self, name: str, rule: RuleLike) -> None:
        """
        Register a rule under a name.

        Params:
            name: Name schema rule references use to point at the rule
            rule: Object implementing the compile/validate contract

        Raises:
            RuleConflictError: If a rule is already registered under ``name``
            TypeError: If ``rule`` does not implement the rule contract
        """
        if name in self.rules:
            raise RuleConflictError(name)
        if not isinstance(rule, RuleLike):
            raise TypeError(
                f"Rule '{name}' must define compile() and validate(), got {type(rule).__name__}"
            )
        self.rules[name] = rule

    def get(self, name: str) -> RuleLike:
        """
        Get a rule by name.

        Params:
            name: Registered rule name

        Returns:
            The registered rule

        Raises:
            UnknownRuleError: If no rule is registered under ``name``
        """
        try:
            return self.rules[name]
        except KeyError:
            raise UnknownRuleError(name, self.list_rules()) from None

    def has_rule(self, name: str) -> bool:
        """Check if a rule is registered under ``name``."""
        return name in self.rules

    def list_rules(self) -> list[str]:
        """Get the registered rule names in registration order."""
        return list(self.rules)

    def extend(self, rules: dict[str, RuleLike]) -> "RuleCatalog":
        """Return a new catalog holding these rules plus ``rules``."""
        catalog = RuleCatalog(self.rules)
        for name, rule in rules.items():
            catalog.register(name, rule)
        return catalog

    def __contains__(self, name: object) -> bool:
        return name in self.rules

    def __len__(self) -> int:
        return len(self.rules)


def default_catalog() -> RuleCatalog:
    """Create a catalog pre-loaded with the built-in rules."""
    from valtree.rules.constraints import CONSTRAINT_RULES
    from valtree.rules.primitives import PRIMITIVE_RULES

    return RuleCatalog({**PRIMITIVE_RULES, **CONSTRAINT_RULES})
