# neurostep/services/catalog.py
import json
from typing import Dict, List, Optional
from pydantic import ValidationError
from neurostep.models.question import Course
from neurostep.utils.logger import logger
from neurostep.utils.config import settings

class CourseCatalog:
    def __init__(self):
        self.courses: Dict[str, Course] = {}
        logger.info("CourseCatalog initialized (data loading deferred).")

    def load_courses(self, json_path: Optional[str] = None):
        """
        Loads courses from a JSON file mapping course ids to course bodies.
        Courses that fail validation or have no questions are skipped.
        """
        json_path = json_path if json_path is not None else settings.course_catalog_path
        self.courses = {}
        try:
            with open(json_path, mode="r", encoding="utf-8") as f:
                raw_courses = json.load(f)
        except FileNotFoundError:
            logger.error(f"Course catalog file not found at: {json_path}")
            return
        except json.JSONDecodeError as e:
            logger.error(f"Course catalog at {json_path} is not valid JSON: {e}")
            return

        if not isinstance(raw_courses, dict):
            logger.error(f"Course catalog at {json_path} must be an object keyed by course id.")
            return

        for course_id, body in raw_courses.items():
            try:
                course = Course(id=course_id, **body)
            except (ValidationError, TypeError) as e:
                logger.error(f"Skipping course '{course_id}' due to invalid content: {e}")
                continue
            if not course.questions:
                logger.warning(f"Skipping course '{course_id}': it has no questions.")
                continue
            self.courses[course.id] = course

        logger.info(f"Loaded {len(self.courses)} courses from {json_path}.")
        if not self.courses:
            logger.warning(f"No courses loaded from {json_path}. Check the file format and content.")

    def get_all_courses(self) -> List[Course]:
        return list(self.courses.values())

    def get_course(self, course_id: str) -> Optional[Course]:
        return self.courses.get(course_id)

# Shared catalog instance, loaded during application startup
course_catalog = CourseCatalog()
