"""Contact form messages."""

from django.db import models


class ContactMessage(models.Model):
    """A message left by a visitor. Written once, never edited."""

    class Subject(models.TextChoices):
        STORY = "story", "Share a Story"
        QUESTION = "question", "Ask a Question"
        COLLABORATION = "collaboration", "Collaboration Inquiry"
        FEEDBACK = "feedback", "Website Feedback"
        OTHER = "other", "Other"

    name = models.CharField(max_length=200)
    email = models.EmailField()
    subject = models.CharField(max_length=20, choices=Subject.choices)
    message = models.TextField()
    ip_address = models.GenericIPAddressField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["ip_address", "created_at"], name="contact_ip_created_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.name} <{self.email}>: {self.get_subject_display()}"
