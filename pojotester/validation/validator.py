# pojotester/validation/validator.py
# Validator -- runs rules then testers against a PojoClass, fail-fast.
#
# Usage:
#   validator = (
#       ValidatorBuilder.create()
#       .with_rules(GetterMustExistRule(), SetterMustExistRule())
#       .with_testers(SetterTester(), GetterTester())
#       .build()
#   )
#   validator.validate(get_pojo_class(Account))

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

from pojotester.reflection.factory import get_pojo_classes_recursively
from pojotester.reflection.filters import PojoClassFilter
from pojotester.reflection.pojo_class import PojoClass
from pojotester.validation.rules import Rule
from pojotester.validation.testers import Tester

logger = logging.getLogger(__name__)


class Validator:
    """
    Immutable pairing of rules and testers.

    validate() raises the first VerificationFailure produced by a rule or a
    tester; rules always run before testers, each in the order given.
    """

    def __init__(self, rules: Sequence[Rule], testers: Sequence[Tester]) -> None:
        self._rules: Tuple[Rule, ...] = tuple(rules)
        self._testers: Tuple[Tester, ...] = tuple(testers)

    @property
    def rules(self) -> Tuple[Rule, ...]:
        return self._rules

    @property
    def testers(self) -> Tuple[Tester, ...]:
        return self._testers

    def validate(self, pojo_class: PojoClass) -> None:
        logger.debug(
            "Validating %s with %d rule(s) and %d tester(s)",
            pojo_class.name, len(self._rules), len(self._testers),
        )
        for rule in self._rules:
            rule.evaluate(pojo_class)
        for tester in self._testers:
            tester.run(pojo_class)

    def validate_recursively(
        self,
        package_name: str,
        pojo_filter: Optional[PojoClassFilter] = None,
    ) -> List[PojoClass]:
        """Validate every class under package_name; return those validated."""
        pojo_classes = get_pojo_classes_recursively(package_name, pojo_filter)
        for pojo_class in pojo_classes:
            self.validate(pojo_class)
        return pojo_classes


class ValidatorBuilder:

    def __init__(self) -> None:
        self._rules: List[Rule] = []
        self._testers: List[Tester] = []

    @classmethod
    def create(cls) -> "ValidatorBuilder":
        return cls()

    def with_rules(self, *rules: Rule) -> "ValidatorBuilder":
        self._rules.extend(rules)
        return self

    def with_testers(self, *testers: Tester) -> "ValidatorBuilder":
        self._testers.extend(testers)
        return self

    def build(self) -> Validator:
        return Validator(self._rules, self._testers)
