from __future__ import annotations

import logging
from typing import List, Optional

from src.core.identifiers import PROJECT
from src.core.state import LedgerState
from src.models.dto import Project, Track


logger = logging.getLogger(__name__)


class ProjectStore:
    """Projects and the tracks embedded in them.

    The mutators report failure as ``False`` without further detail; an
    unknown project id is the only way they can fail.
    """

    def __init__(self, state: LedgerState) -> None:
        self._state = state

    def create_project(self, title: str, description: str, owner: str) -> int:
        with self._state.lock:
            project_id = self._state.allocator.next(PROJECT)
            self._state.projects[project_id] = Project(
                id=project_id,
                title=title,
                description=description,
                owner=owner,
            )
        logger.info("Created project %s (%r) for owner %s", project_id, title, owner)
        return project_id

    def add_track(
        self,
        project_id: int,
        name: str,
        content_hash: str,
        uploaded_by: str,
        timestamp: int,
    ) -> bool:
        with self._state.lock:
            project = self._state.projects.get(project_id)
            if project is None:
                logger.warning("add_track: unknown project %s", project_id)
                return False
            # The timestamp doubles as the track id
            project.tracks.append(
                Track(
                    id=timestamp,
                    name=name,
                    content_hash=content_hash,
                    uploaded_by=uploaded_by,
                    timestamp=timestamp,
                )
            )
        logger.info("Added track %s (%r) to project %s", timestamp, name, project_id)
        return True

    def add_contributor(self, project_id: int, contributor: str) -> bool:
        with self._state.lock:
            project = self._state.projects.get(project_id)
            if project is None:
                logger.warning("add_contributor: unknown project %s", project_id)
                return False
            if contributor not in project.contributors:
                project.contributors.append(contributor)
                logger.info("Added contributor %s to project %s", contributor, project_id)
        return True

    def remove_track(self, project_id: int, track_id: int) -> bool:
        with self._state.lock:
            project = self._state.projects.get(project_id)
            if project is None:
                logger.warning("remove_track: unknown project %s", project_id)
                return False
            before = len(project.tracks)
            project.tracks = [t for t in project.tracks if t.id != track_id]
            removed = before - len(project.tracks)
        logger.info("Removed %d track(s) with id %s from project %s", removed, track_id, project_id)
        return True

    def get_project(self, project_id: int) -> Optional[Project]:
        with self._state.lock:
            project = self._state.projects.get(project_id)
            if project is None:
                logger.debug("get_project: unknown project %s", project_id)
                return None
            return project.model_copy(deep=True)

    def list_projects(self) -> List[Project]:
        with self._state.lock:
            return [p.model_copy(deep=True) for p in self._state.projects.values()]

    def get_project_tracks(self, project_id: int) -> List[Track]:
        with self._state.lock:
            project = self._state.projects.get(project_id)
            if project is None:
                logger.debug("get_project_tracks: unknown project %s", project_id)
                return []
            return [t.model_copy() for t in project.tracks]


__all__ = ["ProjectStore"]
