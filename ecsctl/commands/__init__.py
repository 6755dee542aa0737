from . import clusters, task_definitions

__all__ = ['clusters', 'task_definitions']
