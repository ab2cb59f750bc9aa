"""Core analysis passes: tokenizing, structure, syntax checks, scoring and orchestration."""
