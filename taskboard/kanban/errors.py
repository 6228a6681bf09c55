# taskboard/kanban/errors.py


class KanbanError(Exception):
    pass


class InvalidTaskReference(KanbanError):
    def __init__(self, task_id):
        super().__init__(f"Task {task_id!r} is not on this board")
        self.task_id = task_id


class InvalidColumnReference(KanbanError):
    def __init__(self, column_id):
        super().__init__(f"Column {column_id!r} is not on this board")
        self.column_id = column_id


class WipLimitExceeded(KanbanError):
    def __init__(self, column_id, wip_limit: int, count: int):
        super().__init__(
            f"Column {column_id!r} would hold {count} tasks (WIP limit {wip_limit})"
        )
        self.column_id = column_id
        self.wip_limit = wip_limit
        self.count = count
