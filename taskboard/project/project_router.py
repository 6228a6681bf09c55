# taskboard/project/project_router.py

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from taskboard.activity.activity_service import log_activity
from taskboard.auth.auth_router import get_current_user
from taskboard.board.board_service import create_board_from_template
from taskboard.database import get_db
from taskboard.models.board import Board
from taskboard.models.project import Project
from taskboard.models.task import Task
from taskboard.models.user import User
from taskboard.project.project_service import get_owned_project
from taskboard.schemas.project_schema import ProjectCreate, ProjectUpdate, ProjectRead

router = APIRouter(prefix="/projects", tags=["projects"])


# ==========================
#  CREATE PROJECT
# ==========================
@router.post("/", response_model=ProjectRead, status_code=201)
def create_project(
    data: ProjectCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    project = Project(
        owner_id=user.id,
        name=data.name,
        description=data.description,
        status=data.status,
        priority=data.priority,
        start_date=data.start_date,
        due_date=data.due_date,
    )
    db.add(project)
    db.flush()

    # every project starts with one board
    create_board_from_template(
        db,
        project_id=project.id,
        name="Main Board",
        template=data.board_template,
        is_default=True,
    )
    log_activity(
        db,
        user_id=user.id,
        entity_type="project",
        entity_id=project.id,
        action="created",
        changes={"project_name": project.name},
        commit=False,
    )
    db.commit()
    db.refresh(project)
    return project


# ==========================
#  GET ALL PROJECTS
# ==========================
@router.get("/", response_model=list[ProjectRead])
def get_all_projects(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return (
        db.query(Project)
        .filter(Project.owner_id == user.id)
        .order_by(Project.created_at.desc(), Project.id.desc())
        .all()
    )


# ==========================
#  GET PROJECT BY ID
# ==========================
@router.get("/{project_id}", response_model=ProjectRead)
def get_project(project_id: int, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return get_owned_project(db, project_id, user)


# ==========================
#  UPDATE PROJECT (PATCH)
# ==========================
@router.patch("/{project_id}", response_model=ProjectRead)
def update_project(
    project_id: int,
    data: ProjectUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    project = get_owned_project(db, project_id, user)

    # exclude_unset so a client can still send an explicit empty string
    changes = data.model_dump(exclude_unset=True, exclude_none=True)
    for field, value in changes.items():
        setattr(project, field, value)

    if changes:
        log_activity(
            db,
            user_id=user.id,
            entity_type="project",
            entity_id=project.id,
            action="updated",
            changes={k: v.isoformat() if hasattr(v, "isoformat") else v for k, v in changes.items()},
            commit=False,
        )
    db.commit()
    db.refresh(project)
    return project


# ==========================
#  DELETE PROJECT
# ==========================
@router.delete("/{project_id}", status_code=204)
def delete_project(project_id: int, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    project = get_owned_project(db, project_id, user)

    # SQLite does not enforce ON DELETE CASCADE unless asked to, so clean up here
    db.query(Task).filter(Task.project_id == project.id).delete(synchronize_session=False)
    for board in db.query(Board).filter(Board.project_id == project.id).all():
        db.delete(board)
    db.delete(project)
    db.commit()
    return
