def format_runtime(minutes: int | None) -> str | None:
    """Render a runtime as "2h 16m"; unknown or zero runtimes render nothing."""
    if not minutes:
        return None
    hours, mins = divmod(minutes, 60)
    return f"{hours}h {mins}m"


def format_currency(amount: int | None) -> str | None:
    """Render a USD amount. TMDB reports unknown budgets/revenues as 0."""
    if not amount:
        return None
    return f"${amount:,.2f}"


def release_year(release_date: str | None) -> str:
    if not release_date or len(release_date) < 4 or not release_date[:4].isdigit():
        return "N/A"
    return release_date[:4]
