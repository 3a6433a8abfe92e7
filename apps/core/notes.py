"""
Notes panel persistence.

One store, one backend: every failure surfaces as NoteStoreError instead
of quietly switching to another storage.
"""

import logging

from django.db import DatabaseError
from django.utils import timezone

from .models import AdminNote

logger = logging.getLogger(__name__)


class NoteStoreError(Exception):
    pass


class NoteStore:
    """Interface for notes persistence, keyed by page"""

    def list(self, page_key):
        raise NotImplementedError

    def save(self, page_key, title, content, note_id=None):
        raise NotImplementedError

    def delete(self, page_key, note_id):
        raise NotImplementedError


class DatabaseNoteStore(NoteStore):

    def list(self, page_key):
        try:
            return [note.as_row() for note in AdminNote.objects.filter(page_key=page_key).order_by('-updated_at')]
        except DatabaseError as e:
            logger.error(f"Failed to load notes for {page_key}: {e}", exc_info=True)
            raise NoteStoreError('Failed to load notes') from e

    def save(self, page_key, title, content, note_id=None):
        title = (title or '').strip()
        if not title:
            raise NoteStoreError('Please enter a note title')

        try:
            if note_id is None:
                note = AdminNote.objects.create(
                    page_key=page_key,
                    title=title,
                    notes=content or '',
                    updated_at=timezone.now(),
                )
            else:
                note = AdminNote.objects.filter(page_key=page_key, pk=note_id).first()
                if note is None:
                    raise NoteStoreError('Note not found')
                note.title = title
                note.notes = content or ''
                note.updated_at = timezone.now()
                note.save(update_fields=['title', 'notes', 'updated_at'])
        except DatabaseError as e:
            logger.error(f"Failed to save note on {page_key}: {e}", exc_info=True)
            raise NoteStoreError('Failed to save note') from e

        return note.as_row()

    def delete(self, page_key, note_id):
        try:
            deleted, _ = AdminNote.objects.filter(page_key=page_key, pk=note_id).delete()
        except DatabaseError as e:
            logger.error(f"Failed to delete note {note_id}: {e}", exc_info=True)
            raise NoteStoreError('Failed to delete note') from e

        if not deleted:
            raise NoteStoreError('Note not found')


note_store = DatabaseNoteStore()
