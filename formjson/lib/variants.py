"""Form variants: the fixed field lists the converter knows about.

Two variants share the same rule primitives and engine:

- ``basic``: name / age / bool / date / date2
- ``lottery``: giveaway form with name / winners / fromDate / toDate /
  poolSize / open

Each variant also declares how its normalized values map onto the JSON
payload keys, and whether a form session drops out of full disclosure once
the form becomes valid again.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, List, Mapping, Optional, Tuple

from formjson.lib import patterns
from formjson.lib.errors import ConfigurationError, UnknownFieldError
from formjson.lib.rules import (
    DateOrderRule,
    FieldRule,
    date_rule,
    enum_rule,
    integer_rule,
    text_rule,
)

if TYPE_CHECKING:
    from formjson.lib.engine import DisclosureMode, ValidationResult

__all__ = [
    "FormVariant",
    "BASIC_FORM",
    "LOTTERY_FORM",
    "VARIANTS",
    "DEFAULT_VARIANT",
    "get_variant",
    "list_variants",
]


@dataclass(frozen=True)
class FormVariant:
    """A Field Rule Set plus the metadata needed to render and export it.

    Attributes:
        name: Variant identifier used on the command line and in settings
        title: Heading shown by the presentation layer
        rules: Field rules in declaration order
        cross_rules: Cross-field ordering rules
        payload_keys: Field name -> JSON payload key
        reset_disclosure_on_valid: Drop full disclosure (and clear the
            touched set after a valid submit) once the form is valid
    """

    name: str
    title: str
    rules: Tuple[FieldRule, ...]
    cross_rules: Tuple[DateOrderRule, ...] = ()
    payload_keys: Mapping[str, str] = field(default_factory=dict)
    reset_disclosure_on_valid: bool = True
    description: str = ""

    @property
    def field_names(self) -> List[str]:
        return [rule.name for rule in self.rules]

    def rule(self, name: str) -> FieldRule:
        """Look up a field rule by name."""
        for rule in self.rules:
            if rule.name == name:
                return rule
        raise UnknownFieldError(name, known_fields=self.field_names, variant=self.name)

    def initial_values(self) -> Dict[str, str]:
        """Empty snapshot in declaration order."""
        return {name: "" for name in self.field_names}

    def payload_key(self, name: str) -> str:
        return self.payload_keys.get(name, name)

    def evaluate(
        self,
        snapshot: Mapping[str, Optional[str]],
        mode: Optional["DisclosureMode"] = None,
    ) -> "ValidationResult":
        """Validate a snapshot against this variant's rules."""
        from formjson.lib.engine import evaluate

        return evaluate(self, snapshot, mode)


BASIC_FORM = FormVariant(
    name="basic",
    title="JSON Converter",
    description="各カラムに値を入力して、JSON形式を生成します。",
    rules=(
        text_rule(
            "name",
            label="name（日本語文字列・数字可）",
            required="名前を入力してください。",
            hint='禁止文字: < > " \' & 環境依存文字（① ㈱ ㍉ Ⅰ など）',
        ),
        integer_rule(
            "age",
            label="age（1〜10000の数字）",
            required="年齢を入力してください。",
            minimum=1,
            maximum=10000,
        ),
        enum_rule("bool", label="bool（true / false）"),
        date_rule("date", label="日付1（YYYY-MM-DD）"),
        date_rule("date2", label="日付2（YYYY-MM-DD）"),
    ),
    cross_rules=(
        DateOrderRule(
            "date",
            "date2",
            "日付1と同じ日付、または日付1より後の日付を入力してください。",
        ),
    ),
    reset_disclosure_on_valid=True,
)

LOTTERY_FORM = FormVariant(
    name="lottery",
    title="Giveaway JSON Converter",
    description="抽選の条件を入力して、JSON形式を生成します。",
    rules=(
        text_rule(
            "name",
            label="顧客名（日本語文字列・数字可）",
            required="顧客名を入力してください。",
            forbidden=patterns.FORBIDDEN_CHARACTERS_WITH_SLASH,
            allowed=patterns.JAPANESE_TEXT_WITH_MARKS,
            hint='禁止文字: < > " \' & / 環境依存文字（① ㈱ ㍉ Ⅰ など）',
        ),
        integer_rule(
            "winners",
            label="当選者数（0〜10000の数字）",
            required="当選者数を入力してください。",
            minimum=0,
            maximum=10000,
        ),
        date_rule("fromDate", label="開始日（YYYY-MM-DD）"),
        date_rule("toDate", label="終了日（YYYY-MM-DD）"),
        integer_rule(
            "poolSize",
            label="応募者数（1〜10000の数字）",
            required="応募者数を入力してください。",
            minimum=1,
            maximum=10000,
        ),
        enum_rule("open", label="公開（true / false）"),
    ),
    cross_rules=(
        DateOrderRule(
            "fromDate",
            "toDate",
            "開始日と同じ日付、または開始日より後の日付を入力してください。",
        ),
    ),
    payload_keys={
        "name": "customer_name",
        "fromDate": "from_date",
        "toDate": "to_date",
        "poolSize": "pool_size",
    },
    reset_disclosure_on_valid=False,
)

VARIANTS: Dict[str, FormVariant] = {
    BASIC_FORM.name: BASIC_FORM,
    LOTTERY_FORM.name: LOTTERY_FORM,
}

DEFAULT_VARIANT = BASIC_FORM.name


def list_variants() -> List[str]:
    return list(VARIANTS)


def get_variant(name: str) -> FormVariant:
    """Look up a form variant by name.

    Raises:
        ConfigurationError: If no variant has that name
    """
    try:
        return VARIANTS[name]
    except KeyError:
        raise ConfigurationError(
            f"Unknown form variant '{name}'",
            setting="variant",
            value=name,
            suggestion=f"Use one of: {', '.join(VARIANTS)}",
        ) from None
