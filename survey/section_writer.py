from datetime import datetime

from survey.dashboard import AggregateSummary
from survey.scoring_engine import SurveyResult, persona_ranges


def build_section(title: str, content: str) -> str:
    return f"\n\n=== {title.upper()} ===\n{content.strip()}\n"


def headline(result: SurveyResult) -> str:
    if result.is_hybrid:
        return f"You show a hybrid persona combining: {' & '.join(result.tied)}"
    return f"Your primary persona is: {result.primary}"


def section_result_overview(result: SurveyResult) -> str:
    return build_section("Your Spiritual Persona Results", headline(result))


def section_detailed_scores(result: SurveyResult) -> str:
    ranges = persona_ranges()
    lines = []
    for persona, score in result.ranked_scores():
        lo, hi = ranges[persona]
        lines.append(f"{persona}: {score} (range {lo}-{hi})")
    return build_section("Your Detailed Scores", "\n".join(lines))


def section_dashboard_summary(summary: AggregateSummary) -> str:
    body = (
        f"Total Responses: {summary.total_responses}\n"
        f"Most Common: {summary.most_common}\n"
        f"Unique Personas: {summary.unique_personas}"
    )
    return build_section("Survey Analytics Dashboard", body)


def section_distribution(summary: AggregateSummary) -> str:
    if not summary.distribution:
        return build_section("Persona Distribution", "No data available")
    lines = [f"{name}: {count} ({pct:.1f}%)" for name, count, pct in summary.distribution]
    return build_section("Persona Distribution", "\n".join(lines))


def compile_result_report(result: SurveyResult) -> str:
    return "\n".join([section_result_overview(result), section_detailed_scores(result)])


def compile_dashboard_report(summary: AggregateSummary) -> str:
    sections = [
        section_dashboard_summary(summary),
        section_distribution(summary),
        build_section("Appendix", "Generated on " + datetime.now().strftime("%Y-%m-%d %H:%M")),
    ]
    return "\n".join(sections)
