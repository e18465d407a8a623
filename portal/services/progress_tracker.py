"""
ProgressTracker - where a student is in a course.

Provides:
- Course tree loading with lock/completion annotations
- Lesson selection and completion with sequential gating
- Module completion and project submission
- Lesson-ratio progress percentage
"""
import logging
from typing import Optional

from portal.models.course import CourseTree, LessonContent, LessonNode, ModuleNode, round_pct
from portal.services.api_client import ApiClient
from portal.services.errors import LessonLocked, NotEnrolled, NotFound, PermissionDenied
from portal.services.request_state import RequestState

logger = logging.getLogger(__name__)


def compute_progress_pct(tree: CourseTree) -> int:
    """
    Percentage of completed lessons out of all lessons in the course.

    Returns 0 for a course without lessons.
    """
    total = tree.total_lessons
    if total == 0:
        return 0
    return round_pct(100 * tree.completed_lessons / total)


def apply_sequential_gating(tree: CourseTree, keep_unlocked: bool = False):
    """
    Recompute `unlocked` on modules and `locked` on lessons in place.

    Unit 1 of a sequence is always unlocked; unit k is unlocked iff unit k-1
    is both unlocked and completed, so a gap anywhere keeps everything after
    it locked. The first lesson of a module follows the module. With
    keep_unlocked, a unit that is already unlocked stays unlocked.
    """
    previous_completed = True
    for index, module in enumerate(tree.modules):
        if module.order is None:
            module.order = index + 1

        module.unlocked = previous_completed or (keep_unlocked and module.unlocked)

        lesson_gate = module.unlocked
        for lesson in module.lessons:
            unlocked = lesson_gate or (keep_unlocked and not lesson.locked)
            lesson.locked = not unlocked
            lesson_gate = unlocked and lesson.completed

        previous_completed = module.unlocked and module.is_completed


class ProgressTracker:
    """
    Navigable state of one course for the logged-in student.

    All reads and writes go through the ApiClient; the tree is a transient copy
    that is only mutated after the backend confirmed a change.
    """

    OPERATIONS = ('load', 'select', 'complete', 'submit')

    def __init__(self, api: ApiClient, course_id: str):
        """
        Initialize tracker.

        Args:
            api: ApiClient bound to the student's session
            course_id: Course to track
        """
        self.api = api
        self.course_id = course_id
        self.tree: Optional[CourseTree] = None
        self.current_lesson_id: Optional[str] = None
        self.lesson_content: Optional[LessonContent] = None
        self.requests = {name: RequestState() for name in self.OPERATIONS}

    @property
    def progress_pct(self) -> int:
        if self.tree is None:
            return 0
        return compute_progress_pct(self.tree)

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------

    def load_course_tree(self) -> CourseTree:
        """
        Fetch the module/lesson tree and the completion marker.

        Raises:
            NotEnrolled: backend refused the course for this student
            NotFound: course no longer exists
        """
        with self.requests['load'].track():
            try:
                tree = self.api.course_tree(self.course_id)
            except NotFound as e:
                raise NotFound(e.detail or 'Course not found', e.status_code) from e
            except PermissionDenied as e:
                raise NotEnrolled(e.detail, e.status_code) from e

        apply_sequential_gating(tree)
        self.tree = tree
        self.current_lesson_id = self._resolve_current_lesson()
        logger.info(f"Course {self.course_id} loaded: {tree.completed_lessons}/{tree.total_lessons} lessons completed")
        return tree

    def _resolve_current_lesson(self) -> Optional[str]:
        """Marker's lesson if it exists and is unlocked, else the first lesson"""
        marker = self.tree.last_lesson_id
        if marker:
            found = self.tree.find_lesson(marker)
            if found and not found[1].locked:
                return marker

        for _, lesson in self.tree.iter_lessons():
            return lesson.id
        return None

    def _require_tree(self) -> CourseTree:
        if self.tree is None:
            raise RuntimeError('Course tree not loaded')
        return self.tree

    def _lookup(self, lesson_id: str) -> tuple[ModuleNode, LessonNode]:
        found = self._require_tree().find_lesson(lesson_id)
        if not found:
            raise NotFound('Lesson not found in this course')
        return found

    def _unlocked_lesson(self, lesson_id: str) -> LessonNode:
        _, lesson = self._lookup(lesson_id)
        if lesson.locked:
            logger.info(f"Rejected locked lesson {lesson_id} in course {self.course_id}")
            raise LessonLocked()
        return lesson

    def _unlocked_module(self, order: int) -> ModuleNode:
        module = self._require_tree().find_module(order)
        if module is None:
            raise NotFound(f'Module {order} not found in this course')
        if not module.unlocked:
            logger.info(f"Rejected locked module {order} in course {self.course_id}")
            raise LessonLocked('This module is locked. Complete the previous module first.')
        return module

    # -------------------------------------------------------------------------
    # Navigation
    # -------------------------------------------------------------------------

    def select_lesson(self, lesson_id: str) -> LessonContent:
        """Fetch content of an unlocked lesson and make it current"""
        self._unlocked_lesson(lesson_id)

        with self.requests['select'].track():
            content = self.api.lesson_content(lesson_id)

        self.lesson_content = content
        self.current_lesson_id = lesson_id
        self.tree.last_lesson_id = lesson_id
        return content

    def current_position(self) -> Optional[tuple[ModuleNode, LessonNode]]:
        """(module, lesson) of the current lesson, for the resume tile"""
        if self.tree is None or not self.current_lesson_id:
            return None
        return self.tree.find_lesson(self.current_lesson_id)

    def next_lesson_id(self, lesson_id: str) -> Optional[str]:
        """The lesson after lesson_id in progress order, if it is unlocked"""
        lessons = [lesson for _, lesson in self._require_tree().iter_lessons()]
        for index, lesson in enumerate(lessons[:-1]):
            if lesson.id == lesson_id:
                following = lessons[index + 1]
                return None if following.locked else following.id
        return None

    # -------------------------------------------------------------------------
    # Completion
    # -------------------------------------------------------------------------

    def mark_complete(self, lesson_id: str) -> CourseTree:
        """
        Persist completion of an unlocked lesson, then update the tree.

        Completing an already-completed lesson succeeds without a call. If the
        backend call fails the tree is left as it was and the error propagates.
        """
        lesson = self._unlocked_lesson(lesson_id)
        if lesson.completed:
            return self.tree

        with self.requests['complete'].track():
            self.api.complete_lesson(lesson_id)

        lesson.completed = True
        apply_sequential_gating(self.tree, keep_unlocked=True)
        self.tree.last_lesson_id = lesson_id
        self.current_lesson_id = lesson_id
        logger.info(f"Lesson {lesson_id} completed, course {self.course_id} at {self.progress_pct}%")
        return self.tree

    def complete_module(self, order: int) -> ModuleNode:
        """
        Mark an unlocked module complete on the backend.

        Only a module without lessons changes locally: once it is completed the
        next module unlocks. A module with lessons counts as completed through
        its lessons alone, so its tree state is left as it was.
        """
        module = self._unlocked_module(order)

        with self.requests['complete'].track():
            self.api.complete_module(self.course_id, order)

        if not module.lessons:
            module.completed = True
            apply_sequential_gating(self.tree, keep_unlocked=True)
        logger.info(f"Module {order} completed in course {self.course_id}")
        return module

    def submit_module(self, order: int, link: str):
        """Submit the project link for an unlocked module"""
        self._unlocked_module(order)

        with self.requests['submit'].track():
            self.api.submit_module(self.course_id, order, link)

        logger.info(f"Project submitted for module {order} in course {self.course_id}")
