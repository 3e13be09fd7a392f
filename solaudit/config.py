from __future__ import annotations

"""
Analyzer configuration: which rules run in each category and how they are
instantiated.

Every implemented rule is registered in RULE_REGISTRY. get_default_config()
enables all of them; select_rules() narrows the set by rule id or category
(this is what the CLI flags map onto).
"""

from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence

from solaudit.findings.models import Category
from solaudit.rules.base import Rule
from solaudit.rules.optimizations.address_balance import AddressBalanceRule
from solaudit.rules.optimizations.cache_array_length import CacheArrayLengthRule
from solaudit.rules.optimizations.event_indexing import EventIndexingRule
from solaudit.rules.optimizations.multiple_require import MultipleRequireRule
from solaudit.rules.optimizations.postfix_increment import PostfixIncrementRule
from solaudit.rules.optimizations.private_constant import PrivateConstantRule
from solaudit.rules.optimizations.safe_math import SafeMathRule
from solaudit.rules.optimizations.string_errors import StringErrorsRule
from solaudit.rules.qa.constructor_order import ConstructorOrderRule
from solaudit.rules.qa.private_func_leading_underscore import PrivateFuncLeadingUnderscoreRule
from solaudit.rules.qa.private_vars_leading_underscore import PrivateVarsLeadingUnderscoreRule
from solaudit.rules.vulnerabilities.divide_before_multiply import DivideBeforeMultiplyRule
from solaudit.rules.vulnerabilities.floating_pragma import FloatingPragmaRule
from solaudit.rules.vulnerabilities.tx_origin import TxOriginRule
from solaudit.rules.vulnerabilities.unprotected_selfdestruct import UnprotectedSelfdestructRule

# Registration order is execution order within each category.
RULE_REGISTRY: dict[str, type[Rule]] = {
    rule_cls.id: rule_cls
    for rule_cls in (
        FloatingPragmaRule,
        UnprotectedSelfdestructRule,
        DivideBeforeMultiplyRule,
        TxOriginRule,
        EventIndexingRule,
        AddressBalanceRule,
        CacheArrayLengthRule,
        StringErrorsRule,
        MultipleRequireRule,
        PostfixIncrementRule,
        PrivateConstantRule,
        SafeMathRule,
        PrivateVarsLeadingUnderscoreRule,
        PrivateFuncLeadingUnderscoreRule,
        ConstructorOrderRule,
    )
}


@dataclass
class Config:
    """
    Analyzer configuration: the rules of each category, in execution order,
    and whether the first rule failure aborts the run.
    """

    vulnerabilities: Sequence[Rule] = field(default_factory=list)
    optimizations: Sequence[Rule] = field(default_factory=list)
    qa: Sequence[Rule] = field(default_factory=list)
    fail_fast: bool = False

    def rules_for(self, category: Category) -> Sequence[Rule]:
        return {
            Category.VULNERABILITY: self.vulnerabilities,
            Category.OPTIMIZATION: self.optimizations,
            Category.QUALITY: self.qa,
        }[category]

    @property
    def rule_count(self) -> int:
        return len(self.vulnerabilities) + len(self.optimizations) + len(self.qa)


def _build(rule_classes: Iterable[type[Rule]], fail_fast: bool) -> Config:
    config = Config(vulnerabilities=[], optimizations=[], qa=[], fail_fast=fail_fast)
    for rule_cls in rule_classes:
        rule = rule_cls()
        if rule.category == Category.VULNERABILITY:
            config.vulnerabilities.append(rule)
        elif rule.category == Category.OPTIMIZATION:
            config.optimizations.append(rule)
        else:
            config.qa.append(rule)
    return config


def get_default_config(fail_fast: bool = False) -> Config:
    """Return the configuration with every registered rule enabled."""
    return _build(RULE_REGISTRY.values(), fail_fast)


def select_rules(
    ids: Optional[Iterable[str]] = None,
    categories: Optional[Iterable[Category]] = None,
    fail_fast: bool = False,
) -> Config:
    """
    Return a configuration restricted to the given rule ids and/or categories.

    Raises:
        KeyError: an id is not registered.
    """
    selected = list(RULE_REGISTRY.values())
    if ids:
        wanted = list(ids)
        unknown = [rule_id for rule_id in wanted if rule_id not in RULE_REGISTRY]
        if unknown:
            raise KeyError(f"unknown rule id(s): {', '.join(unknown)}")
        selected = [cls for cls in selected if cls.id in wanted]
    if categories:
        allowed = set(categories)
        selected = [cls for cls in selected if cls.category in allowed]
    return _build(selected, fail_fast)
