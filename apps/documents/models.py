import uuid

from django.db import models

from apps.employees.models import Employee


def format_file_size(size):
    """1536 → '1.5 KB'; 0 / None → 'Unknown'"""
    if not size:
        return 'Unknown'
    units = ['Bytes', 'KB', 'MB', 'GB']
    index = 0
    value = float(size)
    while value >= 1024 and index < len(units) - 1:
        value /= 1024
        index += 1
    value = round(value, 2)
    if value == int(value):
        value = int(value)
    return f'{value} {units[index]}'


class Document(models.Model):

    CATEGORY_CHOICES = [
        ('General', 'General'),
        ('HR', 'HR'),
        ('Finance', 'Finance'),
        ('Marketing', 'Marketing'),
        ('Sales', 'Sales'),
        ('Technical', 'Technical'),
        ('Legal', 'Legal'),
        ('Other', 'Other'),
    ]

    STATUS_CHOICES = [
        ('Active', 'Active'),
        ('Archived', 'Archived'),
        ('Deleted', 'Deleted'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    title = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    category = models.CharField(max_length=30, choices=CATEGORY_CHOICES, default='General', db_index=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='Active', db_index=True)

    # File (uploaded here or hosted elsewhere)
    file = models.FileField(upload_to='documents/%Y/%m/', blank=True)
    file_name = models.CharField(max_length=255, blank=True)
    file_type = models.CharField(max_length=100, blank=True, help_text='MIME type, e.g. application/pdf')
    file_size = models.PositiveBigIntegerField(null=True, blank=True, help_text='Bytes')
    file_url = models.CharField(max_length=500, blank=True)

    created_by = models.ForeignKey(Employee, on_delete=models.SET_NULL, null=True, blank=True,
                                   related_name='created_documents', db_column='created_by')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'documents'
        verbose_name = 'Document'
        verbose_name_plural = 'Documents'
        ordering = ['-created_at']

    def __str__(self):
        return self.title

    @property
    def url(self):
        if self.file:
            return self.file.url
        return self.file_url or ''

    @property
    def is_image(self):
        return (self.file_type or '').startswith('image/')

    def as_row(self):
        assignments = list(self.assignments.all())
        return {
            'id': str(self.pk),
            'title': self.title or '',
            'description': self.description or '',
            'category': self.category or '',
            'status': self.status or '',
            'file_name': self.file_name or '',
            'file_type': self.file_type or '',
            'file_size': self.file_size or 0,
            'size': format_file_size(self.file_size),
            'file_url': self.url,
            'is_image': self.is_image,
            'created_by': str(self.created_by_id) if self.created_by_id else '',
            'created_by_name': self.created_by.full_name if self.created_by_id else '',
            'created_at': self.created_at.isoformat() if self.created_at else '',
            'assignment_count': len(assignments),
            'assignments': [assignment.as_dict() for assignment in assignments],
        }


class DocumentAssignment(models.Model):

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    document = models.ForeignKey(Document, on_delete=models.CASCADE, related_name='assignments')
    employee = models.ForeignKey(Employee, on_delete=models.CASCADE, related_name='document_assignments')
    can_view = models.BooleanField(default=True)
    can_download = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'document_assignments'
        verbose_name = 'Document Assignment'
        verbose_name_plural = 'Document Assignments'
        constraints = [
            models.UniqueConstraint(fields=['document', 'employee'], name='document_assignment_once_per_employee'),
        ]

    def __str__(self):
        return f"{self.document} → {self.employee}"

    def as_dict(self):
        return {
            'employee': str(self.employee_id),
            'employee_name': self.employee.full_name if self.employee_id else '',
            'can_view': self.can_view,
            'can_download': self.can_download,
        }
