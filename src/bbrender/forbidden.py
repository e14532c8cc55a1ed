#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbrender/forbidden.py
"""Policy hooks that can veto a tag's normal rendering.

A forbidden rule is a predicate over the ``RenderApi`` of a tag that has a
matching render rule, a message, and an optional override handler. At render
time every rule is evaluated in registration order:

- each rule whose predicate is true contributes a ``forbidden`` diagnostic
- each matching rule's handler runs, so handler side effects always happen
- the first handler result that is not None becomes the tag's output;
  later results are discarded

When at least one rule matched, the tag's own render is skipped entirely and
the override (or an empty string) is used instead.

Examples
--------
Register rules with the explicit method:

    >>> validator = ForbiddenValidator()
    >>> validator.add(lambda api: api.name == "img", "No images here.")

Or with the chained ``check(...).then(...)`` form:

    >>> def setup(check):
    ...     check(lambda api: api.name == "url", "No links.").then(lambda api: "[link removed]")
    >>> validator.register(setup)

"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Optional

from bbrender.constants import DEFAULT_FORBIDDEN_MESSAGE
from bbrender.diagnostics import Diagnostic, DiagnosticKind
from bbrender.exceptions import ValidationError
from bbrender.renderers.base import RenderApi

logger = logging.getLogger(__name__)

ForbiddenPredicate = Callable[[RenderApi], bool]
ForbiddenHandler = Callable[[RenderApi], Optional[str]]


@dataclass
class ForbiddenRule:
    """One forbidden-tag policy check."""

    predicate: ForbiddenPredicate
    message: str = DEFAULT_FORBIDDEN_MESSAGE
    handler: Optional[ForbiddenHandler] = None


@dataclass
class ForbiddenResult:
    """Outcome of evaluating every forbidden rule against one tag."""

    diagnostics: list[Diagnostic] = field(default_factory=list)
    override: Optional[str] = None

    @property
    def matched(self) -> bool:
        return bool(self.diagnostics)


class ForbiddenRuleHandle:
    """Returned by ``check``; attaches an override handler to its rule."""

    def __init__(self, rule: ForbiddenRule):
        self._rule = rule

    def then(self, handler: ForbiddenHandler) -> None:
        """Set the override handler of the rule this handle refers to.

        Raises
        ------
        ValidationError
            If ``handler`` is not callable

        """
        if not callable(handler):
            raise ValidationError(
                "Forbidden 'then' handler must be callable", parameter_name="handler", parameter_value=handler
            )
        self._rule.handler = handler


class ForbiddenValidator:
    """Ordered collection of forbidden rules."""

    def __init__(self) -> None:
        self._rules: list[ForbiddenRule] = []

    @property
    def rules(self) -> tuple[ForbiddenRule, ...]:
        return tuple(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def add(
        self,
        predicate: ForbiddenPredicate,
        message: str = DEFAULT_FORBIDDEN_MESSAGE,
        handler: Optional[ForbiddenHandler] = None,
    ) -> ForbiddenRule:
        """Append a rule.

        Parameters
        ----------
        predicate : callable
            ``predicate(api) -> bool``; True means the tag is forbidden
        message : str
            Message carried by the resulting diagnostic
        handler : callable, optional
            ``handler(api) -> str | None`` producing replacement output

        Returns
        -------
        ForbiddenRule
            The appended rule

        Raises
        ------
        ValidationError
            If ``predicate`` or ``handler`` is not callable

        """
        if not callable(predicate):
            raise ValidationError(
                "Forbidden check function must be callable", parameter_name="predicate", parameter_value=predicate
            )
        if handler is not None and not callable(handler):
            raise ValidationError(
                "Forbidden handler must be callable", parameter_name="handler", parameter_value=handler
            )
        rule = ForbiddenRule(predicate=predicate, message=message, handler=handler)
        self._rules.append(rule)
        return rule

    def register(self, setup: Callable[[Callable[..., ForbiddenRuleHandle]], None]) -> None:
        """Register a batch of rules through a setup callback.

        ``setup`` is called once with a ``check(predicate, message)``
        function. Each ``check`` call appends a rule and returns a handle
        whose ``then(handler)`` attaches an override handler.

        Rules only become active if ``setup`` returns normally.

        Raises
        ------
        ValidationError
            If ``setup`` is not callable

        """
        if not callable(setup):
            raise ValidationError("forbidden() expects a callable", parameter_name="setup", parameter_value=setup)

        batch = ForbiddenValidator()

        def check(predicate: ForbiddenPredicate, message: str = DEFAULT_FORBIDDEN_MESSAGE) -> ForbiddenRuleHandle:
            return ForbiddenRuleHandle(batch.add(predicate, message))

        setup(check)
        self._rules.extend(batch._rules)
        logger.debug("Registered %d forbidden rules", len(batch))

    def evaluate(self, api: RenderApi) -> ForbiddenResult:
        """Evaluate every rule against ``api`` in registration order."""
        result = ForbiddenResult()
        current = api.node.current

        for rule in self._rules:
            if not rule.predicate(api):
                continue

            result.diagnostics.append(
                Diagnostic(
                    kind=DiagnosticKind.FORBIDDEN,
                    tag_name=getattr(current, "name", ""),
                    span=getattr(current, "span", None),
                    pointer=api.pointer,
                    message=rule.message,
                    node=current,
                )
            )
            if rule.handler is not None:
                output = rule.handler(api)
                if output is not None and result.override is None:
                    result.override = output

        if result.matched:
            logger.debug("Tag [%s] matched %d forbidden rules", getattr(current, "name", ""), len(result.diagnostics))
        return result
