"""Reference data: leap-second schedule and time-standard conversions."""
