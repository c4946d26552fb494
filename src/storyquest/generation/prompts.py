"""Jinja2-based prompt builder for story, quiz and illustration requests."""

from __future__ import annotations

from jinja2 import StrictUndefined
from jinja2.sandbox import SandboxedEnvironment

_jinja_env = SandboxedEnvironment(
    autoescape=False,
    keep_trailing_newline=False,
    undefined=StrictUndefined,
)

_STORY_TEMPLATE = """\
Write a unique 500-1000 word educational adventure story for a {{ age }}-year-old {{ gender }} about {{ topic }}.

This should be {{ variation }} {{ setting }}. The main character is {{ name }}, a curious and brave young explorer.

Story ID: {{ story_id }} (make this story completely unique and different from any previous stories)

The story should:
- Be age-appropriate for {{ age }}-year-olds
- Teach about {{ topic }} in a fun, engaging way
- Include simple scientific facts woven naturally into the adventure
- Have an exciting plot with discovery and wonder
- Use vocabulary suitable for ages 6-10
- End with {{ name }} learning something amazing about science
- Be between 500-1000 words
- Include the setting: {{ setting }}
- Follow the theme: {{ variation }}

Make it exciting, educational, and full of wonder! Ensure this story is completely unique and different from other stories about {{ topic }}."""

_QUESTIONS_TEMPLATE = """\
Based on the following story about {{ topic }}, create exactly {{ count }} multiple-choice questions that test a {{ age }}-year-old's understanding of the science concepts presented.

Story: {{ story }}

For each question, provide:
1. A clear question suitable for ages 6-10
2. 4 multiple choice options (A, B, C, D)
3. The correct answer (0 for A, 1 for B, 2 for C, 3 for D)
4. A simple explanation of why the answer is correct

Format your response as a JSON array like this:
[
  {
    "question": "What did {{ name }} learn about...?",
    "options": ["Option A", "Option B", "Option C", "Option D"],
    "correctAnswer": 1,
    "explanation": "Simple explanation suitable for kids"
  }
]

Make sure the questions focus on the key science concepts from the story and are appropriate for a {{ age }}-year-old."""

_IMAGE_TEMPLATE = (
    'A black and white atmospheric illustration showing the environment for a '
    'children\'s science story about "{{ topic }}". The scene should be mysterious '
    "and educational, suitable for kids aged 6-10. Style: black and white sketch, "
    "atmospheric, child-friendly, educational mood. No text or characters, just the "
    "environment and setting."
)


def build_story_prompt(
    name: str,
    age: int,
    gender: str,
    topic: str,
    variation: str,
    setting: str,
    story_id: str,
) -> str:
    return _render_template(
        _STORY_TEMPLATE,
        {
            "name": name,
            "age": age,
            "gender": gender,
            "topic": topic,
            "variation": variation,
            "setting": setting,
            "story_id": story_id,
        },
    )


def build_questions_prompt(name: str, age: int, topic: str, story: str, count: int = 3) -> str:
    return _render_template(
        _QUESTIONS_TEMPLATE,
        {"name": name, "age": age, "topic": topic, "story": story, "count": count},
    )


def build_image_prompt(topic: str) -> str:
    return _render_template(_IMAGE_TEMPLATE, {"topic": topic})


def _render_template(template_str: str, context: dict) -> str:
    template = _jinja_env.from_string(template_str)
    return template.render(**context)
