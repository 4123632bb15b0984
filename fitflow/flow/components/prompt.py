"""
FitFlow Prompt Component.

Enhanced input prompts with:
- Inline validation
- Rich formatting
"""

from typing import Callable, Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.formatted_text import FormattedText
from prompt_toolkit.validation import ValidationError, Validator
from rich.console import Console

from fitflow.flow.theme import Colors, Icons


class FlowValidator(Validator):
    """Validator that wraps a validation function."""

    def __init__(self, validate_fn: Callable[[str], tuple[bool, str]]):
        """
        Args:
            validate_fn: Function that returns (is_valid, error_message)
        """
        self.validate_fn = validate_fn

    def validate(self, document):
        text = document.text
        is_valid, error_msg = self.validate_fn(text)
        if not is_valid:
            raise ValidationError(message=error_msg)


def validate_required(value: str) -> tuple[bool, str]:
    return bool(value.strip()), "This field is required"


def make_number_validator(
    min_value: Optional[int] = None,
    max_value: Optional[int] = None,
    required: bool = True,
) -> Callable[[str], tuple[bool, str]]:
    """Build a validator accepting whole numbers within bounds."""

    def validate_number(value: str) -> tuple[bool, str]:
        value = value.strip()
        if not value and not required:
            return True, ""
        try:
            num = int(value)
        except ValueError:
            return False, "Must be a whole number"
        if min_value is not None and num < min_value:
            return False, f"Must be at least {min_value}"
        if max_value is not None and num > max_value:
            return False, f"Must be at most {max_value}"
        return True, ""

    return validate_number


class FlowPrompt:
    """Enhanced prompt with validation and completion."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()
        self._session: PromptSession = PromptSession()

    @staticmethod
    def _prompt_text(message: str) -> FormattedText:
        return FormattedText([
            (Colors.HINT, f"  {Icons.ARROW_RIGHT} "),
            (Colors.NEUTRAL, message),
            ("", ": "),
        ])

    async def text(
        self,
        message: str,
        default: str = "",
        validator: Optional[Callable[[str], tuple[bool, str]]] = None,
        required: bool = True,
    ) -> str:
        """
        Prompt for text input.

        Args:
            message: Prompt message
            default: Default value
            validator: Optional validation function
            required: Whether input is required

        Returns:
            User input string
        """
        flow_validator = None
        if validator:
            flow_validator = FlowValidator(validator)
        elif required:
            flow_validator = FlowValidator(validate_required)

        result = await self._session.prompt_async(
            self._prompt_text(message),
            default=default,
            validator=flow_validator,
            validate_while_typing=False,
        )

        return result.strip()

    async def number(
        self,
        message: str,
        min_value: Optional[int] = None,
        max_value: Optional[int] = None,
        required: bool = True,
    ) -> Optional[int]:
        """
        Prompt for a whole number.

        Returns:
            The entered number, or None when left empty and not required
        """
        result = await self.text(
            message=message,
            validator=make_number_validator(min_value, max_value, required),
            required=required,
        )
        return int(result) if result else None
