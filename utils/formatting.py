"""
Formatting utilities.
"""

from typing import List


def format_step_label(step: int, total: int) -> str:
    """
    Format a step position for display.

    Args:
        step: Current step number (1-based).
        total: Number of steps in the form.

    Returns:
        Text such as "Step 2 of 5".
    """
    return f"Step {step} of {total}"


def format_errors(errors: List[str], separator: str = ", ") -> str:
    """
    Join error messages into a single line.

    Args:
        errors: Messages in display order.
        separator: Text placed between messages.

    Returns:
        The joined message, or an empty string when there are none.
    """
    return separator.join(errors)
