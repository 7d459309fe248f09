"""LingoFlow flashcard scheduling and sync backend."""
