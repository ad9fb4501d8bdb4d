"""quizpush: publish locally authored quizzes to Canvas LMS."""

__version__ = "1.0.0"
