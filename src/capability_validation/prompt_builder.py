"""
Prompt Builder

Builds the prompt sent to a tool from a case.

Prompt composition (in order, empty blocks omitted):
- Context block
- Task block
- Input block
- Constraints list (one bullet per constraint)
- Instruction suffix chosen by the expected-result type
"""

from capability_validation.domain.entities import Case, ExpectedType


# Instruction suffix per expected-result type (criteria appends a checklist)
TYPE_INSTRUCTIONS: dict[str, str] = {
    ExpectedType.EXACT: "Please provide a precise answer.",
    ExpectedType.PATTERN: "Please follow the specified format in your answer.",
    ExpectedType.CRITERIA: "Make sure your answer satisfies the following criteria:",
    ExpectedType.CREATIVE: "Be creative and provide an innovative solution.",
}


def build_instruction(case: Case) -> str:
    """
    Build the type-specific instruction suffix

    Args:
        case: Case definition

    Returns:
        Instruction string (empty for an unknown expected type)
    """
    instruction = TYPE_INSTRUCTIONS.get(case.expected.type)
    if instruction is None:
        return ""

    lines = [instruction]
    if case.expected.type == ExpectedType.CRITERIA:
        for criterion in case.expected.criteria or []:
            lines.append(f"- [ ] {criterion}")
    return "\n".join(lines) + "\n"


def build_prompt(case: Case) -> str:
    """
    Build the prompt for a case

    The result is deterministic for a given case.

    Args:
        case: Case definition

    Returns:
        Constructed prompt string
    """
    scenario = case.scenario
    prompt_parts = []

    if scenario.context:
        prompt_parts.extend(["# Context", scenario.context, ""])

    prompt_parts.extend(["# Task", scenario.task, ""])

    if scenario.input:
        prompt_parts.extend(["# Input", scenario.input, ""])

    if scenario.constraints:
        prompt_parts.append("# Constraints")
        prompt_parts.extend(f"- {c}" for c in scenario.constraints)
        prompt_parts.append("")

    return "\n".join(prompt_parts) + "\n" + build_instruction(case)
