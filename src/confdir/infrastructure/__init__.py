"""Infrastructure layer - file persistence, serializers, scheduling and logging."""
