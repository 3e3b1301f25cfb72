"""Navigation — named routes, single-flight path changes, before-hooks."""
