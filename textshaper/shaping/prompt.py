"""Prompt optimization: wrap an instruction and its input in a fixed directive."""

INPUT_TAG = "ai-text-shaper-input"

SUPPLEMENTS = (
    f"The subject of the Instruction is the area enclosed by the {INPUT_TAG} tag.",
    "The result should be returned in the language of the Instruction, but if the "
    "Instruction has a language specification, that language should be given priority.",
    "Provide additional explanations or details only if explicitly requested in the Instruction.",
)


def optimize_prompt(prompt: str, input_text: str) -> str:
    """Merge the instruction, the supplemental directives and the input.

    The input is embedded verbatim. Text that itself contains the input tag
    is not escaped.
    """
    supplementation = " ".join(SUPPLEMENTS)
    return (
        f"<Instruction>{prompt}. ({supplementation})</Instruction>\n"
        f"<{INPUT_TAG}>{input_text}</{INPUT_TAG}>"
    )
