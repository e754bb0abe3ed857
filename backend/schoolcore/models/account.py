from django.contrib.auth.models import AbstractUser
from django.db import models

from .branch import Branch


class Account(AbstractUser):
    """
    Login identity. Student and teacher profiles hang off an account; the
    profile's id is written back onto ``profile_id`` once the profile exists.
    """

    ROLE_CHOICES = [
        ("admin", "Admin"),
        ("staff", "Staff"),
        ("student", "Student"),
        ("teacher", "Teacher"),
    ]

    phone = models.CharField(max_length=20, blank=True)
    role = models.CharField(max_length=10, choices=ROLE_CHOICES, default="staff")
    branch = models.ForeignKey(
        Branch,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="accounts",
    )
    profile_id = models.PositiveBigIntegerField(
        null=True,
        blank=True,
        help_text="Id of the Student/Teacher record this account logs in as.",
    )

    class Meta:
        ordering = ["username"]

    def __str__(self):
        return self.email or self.username
