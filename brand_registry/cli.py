from __future__ import annotations

import argparse

from rich.console import Console

from brand_registry.config import Settings, load_settings
from brand_registry.dataset_io import load_dataset, merge_record, write_dataset
from brand_registry.logging_conf import configure_logging
from brand_registry.prompts import PromptIO, PromptOrchestrator, RichPromptIO
from brand_registry.record_builder import build_record
from brand_registry.schema_loader import load_schema_enumerations


def run_session(*, settings: Settings, io: PromptIO, console: Console) -> int:
    enumerations = load_schema_enumerations(settings.schema_path)
    data = load_dataset(settings.data_path, settings.dataset_key)

    orchestrator = PromptOrchestrator(
        io=io,
        existing=data[settings.dataset_key],
        enumerations=enumerations,
        data_label=settings.data_path.name,
    )
    answers = orchestrator.run()

    if not orchestrator.confirmed:
        console.print("\nAborted.", style="red")
        return 1

    record = build_record(answers)
    write_dataset(settings.data_path, merge_record(data, record, settings.dataset_key))
    console.print("\nData written successfully.", style="green")
    return 0


def build_parser() -> argparse.ArgumentParser:
    return argparse.ArgumentParser(
        prog="add-brand",
        description="Interactively add one brand entry to the brand dataset",
    )


def main(argv: list[str] | None = None) -> int:
    build_parser().parse_args(argv)

    settings = load_settings()
    configure_logging(settings.log_level)

    console = Console()
    return run_session(settings=settings, io=RichPromptIO(console), console=console)


if __name__ == "__main__":
    raise SystemExit(main())
