def format_elapsed_time(elapsed_seconds) -> str:
    """Format whole seconds as "MM:SS", or "H:MM:SS" from one hour up."""
    elapsed_seconds = max(0, int(elapsed_seconds))
    hours, rest = divmod(elapsed_seconds, 3600)
    minutes, seconds = divmod(rest, 60)
    if hours:
        return f"{hours}:{minutes:02d}:{seconds:02d}"
    return f"{minutes:02d}:{seconds:02d}"
