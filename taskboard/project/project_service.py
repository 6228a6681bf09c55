# taskboard/project/project_service.py

from fastapi import HTTPException
from sqlalchemy import or_, select
from sqlalchemy.orm import Query, Session

from taskboard.models.project import Project
from taskboard.models.task import Task
from taskboard.models.user import User


def get_owned_project(db: Session, project_id: int, user: User) -> Project:
    """Projects, and the boards and tasks under them, belong to their owner.

    Someone else's project answers 404, the same as one that does not exist.
    """
    project = db.get(Project, project_id)
    if not project or project.owner_id != user.id:
        raise HTTPException(404, "Project not found")
    return project


def owns_project(db: Session, project_id: int, user: User) -> bool:
    project = db.get(Project, project_id)
    return project is not None and project.owner_id == user.id


def check_task_access(db: Session, task: Task, user: User, assignee_ok: bool = True) -> None:
    # the assignee works the task (view, edit, move) without owning the project
    if assignee_ok and task.assignee_id == user.id:
        return
    if not owns_project(db, task.project_id, user):
        raise HTTPException(404, "Task not found")


def visible_tasks(db: Session, user: User) -> Query:
    owned = select(Project.id).where(Project.owner_id == user.id)
    return db.query(Task).filter(or_(Task.project_id.in_(owned), Task.assignee_id == user.id))
