"""
Command-line interface for LegalEase.
"""

import asyncio
import json
from pathlib import Path
from typing import Optional

import click
import structlog

from legalease.config import get_settings

logger = structlog.get_logger(__name__)


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug mode")
@click.pass_context
def cli(ctx: click.Context, debug: bool) -> None:
    """LegalEase: plain-language analysis of legal documents."""
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug

    if debug:
        structlog.configure(
            wrapper_class=structlog.make_filtering_bound_logger(10),
        )


def _load_document(path: str) -> str:
    """Extract a document's text, turning extraction errors into a CLI error."""
    from legalease.exceptions import ExtractionFailure
    from legalease.services.document_processor import extract_text, resolve_mime_type

    document_path = Path(path)
    mime_type = resolve_mime_type(document_path.name, None)

    try:
        return extract_text(document_path, mime_type)
    except ExtractionFailure as e:
        raise click.ClickException(str(e))


def _write_output(output: Optional[str], data: dict) -> None:
    if output:
        Path(output).write_text(json.dumps(data, indent=2))
        click.echo(f"\nResults written to: {output}")


# =========================================================================
# Server Commands
# =========================================================================


@cli.command()
@click.option("--host", default=None, help="Host to bind to")
@click.option("--port", default=None, type=int, help="Port to bind to")
@click.option("--reload", is_flag=True, help="Enable auto-reload")
def serve(host: Optional[str], port: Optional[int], reload: bool) -> None:
    """Start the API server."""
    import uvicorn

    settings = get_settings()
    host = host or settings.api_host
    port = port or settings.api_port

    click.echo(f"Starting LegalEase API server on {host}:{port}")

    uvicorn.run(
        "legalease.api.main:app",
        host=host,
        port=port,
        reload=reload,
    )


# =========================================================================
# Analysis Commands
# =========================================================================


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--output", "-o", type=click.Path(), help="Output file for results")
def analyze(path: str, output: Optional[str]) -> None:
    """Analyze a document and show its summary and risks."""
    from legalease.services.analysis_service import get_analysis_service
    from legalease.services.templates import get_template_library

    text = _load_document(path)

    async def run_analysis():
        return await get_analysis_service().analyze_document(text, Path(path).name)

    analysis = asyncio.run(run_analysis())

    click.echo(f"\n=== {Path(path).name} ===\n")
    click.echo(f"Type: {analysis.document_type.value}")
    click.echo(f"Analysis tier: {analysis.tier.value}")
    click.echo(f"\nSummary: {analysis.summary}")

    if analysis.key_points:
        click.echo("\nKey Points:")
        for point in analysis.key_points:
            click.echo(f"  - {point}")

    if analysis.risk_assessment:
        click.echo(f"\nOverall Risk: {analysis.risk_assessment.overall.value}")

    if analysis.recommendations:
        click.echo("\nRecommendations:")
        for recommendation in analysis.recommendations:
            click.echo(f"  - {recommendation}")

    completeness = get_template_library().validate_completeness(analysis.document_type, text)
    click.echo(f"\nCompleteness: {completeness.completeness:.0f}% ({completeness.recommendation})")

    _write_output(output, analysis.to_dict())


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--output", "-o", type=click.Path(), help="Output file for results")
def risk(path: str, output: Optional[str]) -> None:
    """Score a document's risk with the offline rules only."""
    from legalease.risk.aggregator import assess_risks

    text = _load_document(path)
    assessment = assess_risks(text)

    click.echo(f"\n=== Risk Assessment: {Path(path).name} ===\n")
    click.echo(f"Overall: {assessment.overall.value} (score {assessment.total_score})")

    click.echo("\nCategories:")
    for category, result in assessment.categories.items():
        click.echo(f"  {category.value}: {result.level.value} ({result.score})")
        for finding in result.findings:
            click.echo(f"    - {finding.description}")

    if assessment.red_flags:
        click.echo("\nRed Flags:")
        for flag in assessment.red_flags:
            click.echo(f"  ! {flag.description}")

    click.echo("\nRecommendations:")
    for recommendation in assessment.recommendations:
        click.echo(f"  [{recommendation.priority}] {recommendation.text}")

    _write_output(output, assessment.to_dict())


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.argument("question", type=str)
def ask(path: str, question: str) -> None:
    """Ask a question about a document."""
    from legalease.services.analysis_service import get_analysis_service

    text = _load_document(path)

    async def run_query():
        service = get_analysis_service()
        analysis = await service.analyze_document(text, Path(path).name)
        return await service.answer_question(question, text, analysis)

    answer = asyncio.run(run_query())

    click.echo(f"\nQuestion: {question}")
    click.echo(f"\nAnswer: {answer.answer}")
    click.echo(f"\nConfidence: {answer.confidence}")

    if answer.risk_context:
        click.echo(f"\n{answer.risk_context}")

    if answer.follow_up_questions:
        click.echo("\nYou might also ask:")
        for follow_up in answer.follow_up_questions:
            click.echo(f"  - {follow_up}")


@cli.command()
@click.argument("path_a", type=click.Path(exists=True, dir_okay=False))
@click.argument("path_b", type=click.Path(exists=True, dir_okay=False))
@click.option("--output", "-o", type=click.Path(), help="Output file for results")
def compare(path_a: str, path_b: str, output: Optional[str]) -> None:
    """Compare two documents."""
    from legalease.services.comparison_service import get_comparison_service

    text_a = _load_document(path_a)
    text_b = _load_document(path_b)

    service = get_comparison_service()

    async def run_comparison():
        return await service.compare_documents(
            text_a, Path(path_a).name, text_b, Path(path_b).name
        )

    result = asyncio.run(run_comparison())
    report = service.build_report(result)

    click.echo("\n=== Comparison ===\n")
    click.echo(report.summary)

    overall = report.risk_analysis.overall
    click.echo(f"\nOverall risk: {overall.doc1.value} vs {overall.doc2.value} (safer: {overall.safer})")
    click.echo(f"Financial: {report.financial_impact.recommendation}")
    click.echo(f"Legal: {report.legal_implications.recommendation}")

    click.echo("\nBy aspect:")
    for aspect, aspect_result in result.aspects.aspects.items():
        click.echo(
            f"  {aspect}: {aspect_result.doc1_risk.value} vs "
            f"{aspect_result.doc2_risk.value} -> {aspect_result.winner}"
        )

    if report.key_findings:
        click.echo("\nKey Findings:")
        for finding in report.key_findings:
            click.echo(f"  - {finding.aspect}: {finding.recommendation}")

    _write_output(output, {"result": result.to_dict(), "report": report.to_dict()})


# =========================================================================
# Reference Commands
# =========================================================================


@cli.command()
def templates() -> None:
    """List the document templates."""
    from legalease.services.templates import get_template_library

    click.echo("\n=== Document Templates ===\n")
    for template in get_template_library().all_templates():
        click.echo(f"  {template.id}: {template.name} - {template.description}")


@cli.command()
def health() -> None:
    """Check service health."""
    from legalease.services.llm_service import get_llm_service

    click.echo("\n=== Service Health Check ===\n")

    llm_status = get_llm_service().health_check()
    click.echo("LLM Services:")
    for provider, status in llm_status.items():
        status_str = "✓" if status else "✗"
        click.echo(f"  {provider}: {status_str}")


@cli.command()
def config() -> None:
    """Show current configuration."""
    settings = get_settings()

    click.echo("\n=== LegalEase Configuration ===\n")
    click.echo(f"Environment: {settings.environment}")
    click.echo(f"Debug: {settings.debug}")
    click.echo(f"\nPrimary LLM: {settings.primary_llm_provider} ({settings.primary_llm_model})")
    click.echo(f"Fallback LLM: {settings.fallback_llm_provider} ({settings.fallback_llm_model})")
    click.echo(f"LLM Timeout: {settings.llm_timeout}s")
    click.echo(f"\nAnalysis Excerpt: {settings.analysis_excerpt_chars} chars")
    click.echo(f"Max Upload Size: {settings.max_file_size} bytes")
    click.echo(f"Upload Directory: {settings.upload_dir}")
    click.echo(f"\nAPI: {settings.api_host}:{settings.api_port}")


def main() -> None:
    """Entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
