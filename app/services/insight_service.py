from app.core.config import settings
from app.models.schedule import Insight, ScheduleRollup, UtilizationLevel


def utilization_level(rate: float) -> UtilizationLevel:
    if rate >= 90:
        return UtilizationLevel.CRITICAL
    if rate >= 70:
        return UtilizationLevel.HIGH
    if rate >= 50:
        return UtilizationLevel.OPTIMAL
    return UtilizationLevel.LOW


def build_insights(
    rollup: ScheduleRollup,
    low_utilization_threshold: float | None = None,
    high_no_show_rate_threshold: float | None = None,
) -> list[Insight]:
    """Scheduling recommendations derived from a rollup, in display order."""
    low_util = (
        settings.low_utilization_threshold
        if low_utilization_threshold is None
        else low_utilization_threshold
    )
    high_no_show = (
        settings.high_no_show_rate_threshold
        if high_no_show_rate_threshold is None
        else high_no_show_rate_threshold
    )
    insights: list[Insight] = []
    if rollup.average_utilization < low_util:
        insights.append(
            Insight(
                kind="optimization_opportunity",
                title="Optimization Opportunity",
                message=(
                    f"Your average utilization is {round(rollup.average_utilization)}%. "
                    "Consider consolidating appointments or reducing available time slots to improve efficiency."
                ),
            )
        )
    if rollup.no_show_rate > high_no_show:
        insights.append(
            Insight(
                kind="high_no_show_rate",
                title="High No-Show Rate",
                message=(
                    f"{round(rollup.no_show_rate)}% of appointments result in no-shows. "
                    "Consider implementing reminder systems or overbook strategies."
                ),
            )
        )
    if rollup.overbook_count > 0:
        insights.append(
            Insight(
                kind="overbook_strategy_active",
                title="Overbook Strategy Active",
                message=(
                    f"You have {rollup.overbook_count} overbook appointments to compensate for potential no-shows. "
                    "Monitor actual attendance to optimize this strategy."
                ),
            )
        )
    if rollup.high_risk_count > 0:
        insights.append(
            Insight(
                kind="high_risk_appointments",
                title="High-Risk Appointments",
                message=(
                    f"{rollup.high_risk_count} appointments have high no-show risk. "
                    "Consider sending priority reminders or creating backup overbook slots."
                ),
            )
        )
    return insights
