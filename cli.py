#!/usr/bin/env python3
"""
CLI для конвейера генерации статей.

Использование:
    python cli.py serve --port 8000
    python cli.py generate "AI in Healthcare" --count 2 --tone analytical
    python cli.py batch "Solar power" "Wind power" --count 1
    python cli.py show-config
"""

import asyncio
import json

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from src.api.dependencies import Container
from src.application.commands.generate_article_command import (
    GenerateArticleCommand,
    GenerateBatchCommand,
)
from src.domain.value_objects.content_length import ContentLength
from src.domain.value_objects.tone import Tone
from src.infrastructure.config.logging_config import setup_logging
from src.infrastructure.config.settings import get_settings

console = Console()

TONES = [t.value for t in Tone]
LENGTHS = [length.value for length in ContentLength]


def _pipeline_options(func):
    """Общие опции генерации для generate и batch."""
    options = [
        click.option('--count', 'article_count', default=3, type=click.IntRange(1, 5), help='Число кандидатов'),
        click.option('--length', 'content_length', default='medium', type=click.Choice(LENGTHS), help='Объём'),
        click.option('--tone', default='professional', type=click.Choice(TONES), help='Тональность'),
        click.option('--keywords', 'seo_keywords', default='', help='SEO ключевые слова через запятую'),
        click.option('--no-optimize', is_flag=True, help='Пропустить этап оптимизации'),
        click.option('--no-analytics', is_flag=True, help='Пропустить прогноз'),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _build_command(topic, article_count, content_length, tone, seo_keywords, no_optimize, no_analytics):
    return GenerateArticleCommand(
        topic=topic,
        article_count=article_count,
        content_length=content_length,
        tone=tone,
        seo_keywords=seo_keywords,
        auto_optimize=not no_optimize,
        include_analytics=not no_analytics,
    )


async def _with_container(coro_factory):
    settings = get_settings()
    setup_logging(settings)
    container = Container.build(settings)
    try:
        return await coro_factory(container)
    finally:
        await container.client.close()


@click.group()
def cli():
    """AI Article Pipeline CLI."""
    pass


@cli.command()
@click.option('--host', default=None, help='Адрес (по умолчанию из настроек)')
@click.option('--port', default=None, type=int, help='Порт (по умолчанию из настроек)')
@click.option('--reload', is_flag=True, help='Перезапуск при изменении кода')
def serve(host, port, reload):
    """Запустить HTTP API (uvicorn)."""
    import uvicorn

    settings = get_settings()
    host = host or settings.host
    port = port or settings.port

    console.print(f"\n🚀 [bold green]API на http://{host}:{port}[/bold green] (docs: /docs)\n")
    uvicorn.run("src.main:app", host=host, port=port, reload=reload)


@cli.command()
@click.argument('topic')
@_pipeline_options
@click.option('--json', 'as_json', is_flag=True, help='Вывести результат как JSON')
def generate(topic, as_json, **options):
    """
    Сгенерировать статью по теме.

    Примеры:
        python cli.py generate "AI in Healthcare" --count 2
        python cli.py generate "Remote work" --tone casual --length short --no-analytics
    """
    command = _build_command(topic, **options)

    if not as_json:
        console.print(f"\n🚀 [bold green]Генерация:[/bold green] {topic}")
        console.print(
            f"Кандидатов: {command.article_count}, объём: {command.content_length.value}, "
            f"тон: {command.tone.value}\n"
        )

    async def run(container: Container):
        return await container.command_handler.handle_generate(command)

    with console.status("[cyan]Конвейер работает...", spinner="dots"):
        article = asyncio.run(_with_container(run))

    if as_json:
        click.echo(json.dumps(article.to_dict(), ensure_ascii=False, indent=2))
        return

    result = article.final_article() or {}
    console.print(Panel(result.get("content", "")[:1500], title=article.title, subtitle=str(article.id)))

    table = Table(show_header=False)
    table.add_row("Трендов", str(article.trending_topics_analyzed))
    table.add_row("Кандидатов", str(article.candidates_generated))
    table.add_row("Оптимизирована", "да" if article.is_optimized else "нет")
    table.add_row("Время", f"{article.processing_time_ms} ms")
    if article.performance_prediction:
        table.add_row("Прогноз", article.performance_prediction.get("confidence_level", ""))
    if article.result.get("synthetic"):
        table.add_row("[yellow]Внимание[/yellow]", "[yellow]синтетический ответ[/yellow]")
    console.print(table)
    console.print()


@cli.command()
@click.argument('topics', nargs=-1, required=True)
@_pipeline_options
def batch(topics, **options):
    """
    Пакетная генерация (до 5 тем).

    Примеры:
        python cli.py batch "Solar power" "Wind power" --count 1
    """
    if len(topics) > 5:
        raise click.BadParameter("Maximum 5 topics allowed per batch", param_hint="TOPICS")

    command = GenerateBatchCommand(topics=topics, base=_build_command(topics[0], **options))
    console.print(f"\n🚀 [bold green]Пакет из {len(topics)} тем[/bold green]\n")

    async def run(container: Container):
        return await container.command_handler.handle_generate_batch(command)

    with console.status("[cyan]Генерация...", spinner="dots"):
        result = asyncio.run(_with_container(run))

    table = Table(title="Результаты")
    table.add_column("#")
    table.add_column("Тема")
    table.add_column("Статус")
    table.add_column("ID / ошибка")
    for item in result["batch_results"]:
        ok = item["status"] == "success"
        table.add_row(
            str(item["index"] + 1),
            item["topic"],
            "[green]success[/green]" if ok else "[red]error[/red]",
            item.get("article_id", "") if ok else item.get("error", ""),
        )
    console.print(table)
    console.print(
        f"\n✅ Успешно: {result['successful_generations']}/{result['total_topics']} "
        f"за {result['processing_time_ms']} ms\n"
    )


@cli.command('show-config')
def show_config():
    """Показать текущую конфигурацию."""
    settings = get_settings()

    table = Table(title="Конфигурация", show_header=False)
    table.add_row("API URL", settings.get_chat_completions_url())
    table.add_row("Модель", settings.openai_model)
    table.add_row(
        "API ключ",
        "[green]задан[/green]" if settings.is_api_key_configured() else "[red]не задан[/red]",
    )
    table.add_row("Таймаут", f"{settings.openai_timeout_seconds:.0f}s")
    table.add_row("Ответ по умолчанию", f"max_tokens={settings.openai_max_tokens}, temperature={settings.openai_temperature}")
    table.add_row("Rate limit", f"{settings.rate_limit_per_minute:.0f}/мин (burst {settings.rate_limit_burst})")
    table.add_row("Пауза в пакете", f"{settings.batch_delay_seconds}s")
    table.add_row("HTTP", f"{settings.host}:{settings.port}")
    table.add_row("Лог", settings.log_level)
    console.print(table)

    if not settings.is_api_key_configured():
        console.print("\n💡 Задайте OPENAI_API_KEY в .env или через POST /api/v1/configure\n")


if __name__ == '__main__':
    cli()
