"""
LearnBot package.

Provides:
- Prompt templates for topic explanations, quizzes and tutor answers
- An async gateway to the Gemini generateContent endpoint
- Quiz JSON validation and the public tutor entry points
- A FastAPI surface and a small CLI
"""
