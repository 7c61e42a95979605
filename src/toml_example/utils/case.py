"""Field renaming rules (`rename_all`)."""

from __future__ import annotations

from enum import Enum

from .errors import RenameRuleError

__all__ = ["RenameRule"]


class RenameRule(Enum):
    NONE = ""
    LOWER_CASE = "lowercase"
    UPPER_CASE = "UPPERCASE"
    PASCAL_CASE = "PascalCase"
    CAMEL_CASE = "camelCase"
    SNAKE_CASE = "snake_case"
    SCREAMING_SNAKE_CASE = "SCREAMING_SNAKE_CASE"
    KEBAB_CASE = "kebab-case"
    SCREAMING_KEBAB_CASE = "SCREAMING-KEBAB-CASE"

    @classmethod
    def from_str(cls, rule: str, *, record: str = "") -> RenameRule:
        """Look up a rule by its name, e.g. "kebab-case".

        Args:
            rule (str): Rule name.
            record (str, optional): Record name used in the error message.

        Raises:
            RenameRuleError: Unknown rule name.

        Returns:
            RenameRule: Matching rule.
        """
        for member in cls:
            if member is not cls.NONE and member.value == rule:
                return member

        raise RenameRuleError(
            f"unsupported rename rule {rule!r}, expected one of "
            + ", ".join(repr(member.value) for member in cls if member is not cls.NONE),
            record=record,
        )

    def apply_to_field(self, field: str) -> str:
        """Rename a snake_case field name according to this rule."""
        if self in (RenameRule.NONE, RenameRule.LOWER_CASE, RenameRule.SNAKE_CASE):
            return field
        if self in (RenameRule.UPPER_CASE, RenameRule.SCREAMING_SNAKE_CASE):
            return field.upper()
        if self is RenameRule.PASCAL_CASE:
            pascal = []
            capitalize = True
            for char in field:
                if char == "_":
                    capitalize = True
                elif capitalize:
                    pascal.append(char.upper())
                    capitalize = False
                else:
                    pascal.append(char)
            return "".join(pascal)
        if self is RenameRule.CAMEL_CASE:
            pascal = RenameRule.PASCAL_CASE.apply_to_field(field)
            return pascal[:1].lower() + pascal[1:]
        if self is RenameRule.KEBAB_CASE:
            return field.replace("_", "-")
        # SCREAMING-KEBAB-CASE
        return field.upper().replace("_", "-")

    def apply_to_variant(self, variant: str) -> str:
        """Rename a PascalCase name (class or enum member) according to this rule."""
        if self in (RenameRule.NONE, RenameRule.PASCAL_CASE):
            return variant
        if self is RenameRule.LOWER_CASE:
            return variant.lower()
        if self is RenameRule.UPPER_CASE:
            return variant.upper()
        if self is RenameRule.CAMEL_CASE:
            return variant[:1].lower() + variant[1:]

        snake = "".join(
            f"_{char.lower()}" if index > 0 and char.isupper() else char.lower()
            for index, char in enumerate(variant)
        )
        if self is RenameRule.SNAKE_CASE:
            return snake
        if self is RenameRule.SCREAMING_SNAKE_CASE:
            return snake.upper()
        if self is RenameRule.KEBAB_CASE:
            return snake.replace("_", "-")
        return snake.upper().replace("_", "-")
