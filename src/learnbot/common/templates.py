"""Prompt templating helpers."""
from __future__ import annotations

LEARN_TEMPLATE = """You are an expert computer science tutor. Provide a clear, structured explanation of the topic "{{topic}}" in {{subject}}.

Include:
1. Definition (concise, 2-3 sentences)
2. Key Concepts (3-5 bullet points)
3. Example (with code if applicable)
4. Common Use Cases (2-3 scenarios)
IMPORTANT: The entire response must be in English.
Keep the explanation educational, accurate, and suitable for undergraduate CS students. Use clear formatting with headers and bullet points."""

QUIZ_TEMPLATE = 'Generate exactly 5 multiple-choice quiz questions about "{{topic}}" in "{{subject}}".'

ASK_TEMPLATE = """You are an expert computer science tutor. The student is learning about "{{topic}}" in {{subject}}.

Student question: {{question}}

Provide a clear, concise, and accurate answer. Be pedagogical and helpful. If relevant, include examples or code snippets. Keep your response focused and under 300 words."""


def render_prompt(template: str, **values: str) -> str:
    """
    Render values into the template.

    Args:
        template: Template content containing ``{{name}}`` placeholders.
        values: Replacement text per placeholder name, inserted verbatim.

    Returns:
        Rendered prompt.
    """
    # Single pass so that a value containing "{{other}}" is never re-expanded.
    out = []
    rest = template
    while "{{" in rest:
        head, _, tail = rest.partition("{{")
        name, sep, after = tail.partition("}}")
        out.append(head)
        if sep and name in values:
            out.append(values[name])
            rest = after
        else:
            out.append("{{")
            rest = tail
    out.append(rest)
    return "".join(out)


def build_learn_prompt(subject: str, topic: str) -> str:
    return render_prompt(LEARN_TEMPLATE, subject=subject, topic=topic)


def build_quiz_prompt(subject: str, topic: str) -> str:
    """Quiz prompt; formatting is enforced by the response schema, not prose."""
    return render_prompt(QUIZ_TEMPLATE, subject=subject, topic=topic)


def build_ask_prompt(subject: str, topic: str, question: str) -> str:
    return render_prompt(ASK_TEMPLATE, subject=subject, topic=topic, question=question)
