from __future__ import annotations

from brand_registry.models import AnswerSet, BrandRecord, License
from brand_registry.normalization import normalize_color
from brand_registry.validators import split_alias_list


def _required(value, field_name: str):
    if value is None:
        raise ValueError(f"answer {field_name} is missing")
    return value


def build_record(answers: AnswerSet) -> BrandRecord:
    """Shape a completed AnswerSet into a BrandRecord.

    Optional parts are attached only when their gate was affirmed; a gated part
    with nothing to hold is left off entirely.
    """
    record = BrandRecord(
        title=_required(answers.title, "title"),
        hex=normalize_color(_required(answers.hex, "hex")),
        source=_required(answers.source, "source"),
    )

    if answers.has_guidelines:
        record.guidelines = _required(answers.guidelines, "guidelines")

    if answers.has_license:
        record.license = License(
            type=_required(answers.license_type, "license_type"),
            url=answers.license_url or None,
        )

    if answers.has_aliases:
        aliases: dict[str, list[str]] = {}
        for key in answers.alias_categories:
            names = split_alias_list(answers.alias_lists.get(key, ""))
            if names:
                aliases[key] = names
        if aliases:
            record.aliases = aliases

    return record
