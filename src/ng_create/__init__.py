"""Scaffold Angular projects with Tailwind, ESLint, Prettier, lint-staged and Husky preconfigured."""

__version__ = "0.1.0"
