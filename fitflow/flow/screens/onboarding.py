"""
FitFlow Onboarding Screens.

Five steps, each shown under a step-progress header:
- Step 1: User info (name, age)
- Step 2: Workout preference
- Step 3: Equipment at home
- Step 4: Gym equipment
- Step 5: Fitness goal

Answers are collected into a buffer owned by the caller. Nothing is
persisted here; the buffer becomes the user profile when onboarding
completes.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

from rich.console import Console

from fitflow.core.session import ONBOARDING_STEPS, OnboardingStep
from fitflow.flow.components.menu import Menu, MenuItem
from fitflow.flow.components.progress import ProgressStep, StepProgress
from fitflow.flow.components.prompt import FlowPrompt
from fitflow.flow.theme import Colors, Icons


@dataclass(frozen=True)
class StepScreen:
    """Static content of one onboarding step."""

    step: OnboardingStep
    title: str
    description: str
    answer_key: str
    options: tuple[tuple[str, str], ...] = field(default_factory=tuple)  # (key, label)


STEP_SCREENS: dict[OnboardingStep, StepScreen] = {
    OnboardingStep.USER_INFO: StepScreen(
        step=OnboardingStep.USER_INFO,
        title="About You",
        description="Tell us a little about yourself so we can personalise your plan.",
        answer_key="name",
    ),
    OnboardingStep.WORKOUT_PREFERENCE: StepScreen(
        step=OnboardingStep.WORKOUT_PREFERENCE,
        title="Workout Preference",
        description="Where do you like to train?",
        answer_key="workout_preference",
        options=(
            ("home", "At home"),
            ("gym", "At the gym"),
            ("outdoor", "Outdoors"),
            ("mixed", "A bit of everything"),
        ),
    ),
    OnboardingStep.EQUIPMENT: StepScreen(
        step=OnboardingStep.EQUIPMENT,
        title="Equipment",
        description="What equipment do you have at home?",
        answer_key="equipment",
        options=(
            ("none", "No equipment"),
            ("dumbbells", "Dumbbells"),
            ("bands", "Resistance bands"),
            ("kettlebells", "Kettlebells"),
            ("home_gym", "Full home gym"),
        ),
    ),
    OnboardingStep.GYM_EQUIPMENT: StepScreen(
        step=OnboardingStep.GYM_EQUIPMENT,
        title="Gym Equipment",
        description="Which gym equipment are you comfortable using?",
        answer_key="gym_equipment",
        options=(
            ("free_weights", "Free weights"),
            ("machines", "Machines"),
            ("cardio", "Cardio equipment"),
            ("everything", "Everything"),
            ("not_applicable", "I don't go to a gym"),
        ),
    ),
    OnboardingStep.FITNESS_GOAL: StepScreen(
        step=OnboardingStep.FITNESS_GOAL,
        title="Fitness Goal",
        description="What is your main goal?",
        answer_key="fitness_goal",
        options=(
            ("lose_weight", "Lose weight"),
            ("build_muscle", "Build muscle"),
            ("endurance", "Improve endurance"),
            ("stay_healthy", "Stay healthy"),
        ),
    ),
}


def build_progress(console: Console) -> StepProgress:
    return StepProgress(
        title="Set Up Your Profile",
        steps=[
            ProgressStep(
                key=step.value,
                title=STEP_SCREENS[step].title,
                description=STEP_SCREENS[step].description,
            )
            for step in ONBOARDING_STEPS
        ],
        console=console,
    )


def step_actions(screen: StepScreen, can_go_back: bool) -> list[MenuItem]:
    """Menu items for a step: its options, then Back and Quit."""
    finish = screen.step.is_last
    if screen.options:
        items = [
            MenuItem(
                key=key,
                label=label,
                icon=Icons.GOAL if finish else "",
                description="Finish setup" if finish else "",
                data=key,
            )
            for key, label in screen.options
        ]
    else:
        items = [MenuItem(key="enter", label="Enter your details", icon=Icons.ARROW_RIGHT)]

    if can_go_back:
        items.append(MenuItem(key="back", label="Back", icon=Icons.ARROW_LEFT))
    items.append(MenuItem(key="quit", label="Quit"))
    return items


def build_profile(answers: dict[str, Any]) -> dict[str, Any]:
    """
    Turn buffered onboarding answers into the stored user profile.

    The name is trimmed; unanswered steps are left out.
    """
    profile: dict[str, Any] = {}
    name = str(answers.get("name", "")).strip()
    if name:
        profile["name"] = name
    if answers.get("age") is not None:
        profile["age"] = answers["age"]
    for step in ONBOARDING_STEPS[1:]:
        key = STEP_SCREENS[step].answer_key
        if answers.get(key) is not None:
            profile[key] = answers[key]
    return profile


async def _ask_user_info(console: Console, answers: dict[str, Any]) -> None:
    prompt = FlowPrompt(console)
    answers["name"] = await prompt.text("Your name", default=str(answers.get("name", "")))
    answers["age"] = await prompt.number("Your age (optional)", min_value=13, max_value=100, required=False)


async def show_onboarding_step(
    console: Console,
    step: OnboardingStep,
    answers: dict[str, Any],
    can_go_back: bool = False,
    show_hints: bool = True,
    error: Optional[str] = None,
) -> str:
    """
    Show one onboarding step and record its answer.

    Args:
        console: Rich console
        step: Step to show
        answers: Answer buffer, updated in place
        can_go_back: Whether a Back action is offered
        show_hints: Show keyboard hints under the menu
        error: Message from a failed attempt to leave this step

    Returns:
        'next' once the step is answered, 'back', or 'quit'
    """
    screen = STEP_SCREENS[step]

    console.clear()
    build_progress(console).render(step.value)

    if error:
        console.print(f"  [{Colors.ERROR}]{Icons.ERROR} {error}[/]")
        console.print()

    current = answers.get(screen.answer_key)
    if current:
        console.print(f"  [{Colors.DIM}]Current answer: {current}[/]")

    menu = Menu(title="", items=step_actions(screen, can_go_back), show_hints=show_hints)
    result = await menu.run_async()

    if result is None or result.key == "quit":
        return "quit"
    if result.key == "back":
        return "back"

    if result.key == "enter":
        await _ask_user_info(console, answers)
    else:
        answers[screen.answer_key] = result.data

    return "next"
