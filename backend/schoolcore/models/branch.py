from django.db import models


class Branch(models.Model):
    """
    A campus of the school group. Imports always target exactly one branch.
    """

    code = models.CharField(max_length=20, unique=True)
    name = models.CharField(max_length=150)
    capacity = models.PositiveIntegerField(
        null=True,
        blank=True,
        help_text="Maximum enrolled students; empty means unlimited.",
    )
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["name"]

    def __str__(self):
        return f"{self.name} ({self.code})"


class Grade(models.Model):
    value = models.CharField(max_length=50, unique=True)
    name = models.CharField(max_length=100, blank=True)
    sort_order = models.PositiveSmallIntegerField(default=0)

    class Meta:
        ordering = ["sort_order", "value"]

    def __str__(self):
        return self.name or self.value


class Section(models.Model):
    branch = models.ForeignKey(Branch, on_delete=models.CASCADE, related_name="sections")
    grade_level = models.CharField(max_length=50)
    name = models.CharField(max_length=50)

    class Meta:
        ordering = ["branch", "grade_level", "name"]
        constraints = [
            models.UniqueConstraint(
                fields=["branch", "grade_level", "name"],
                name="unique_section_per_branch_grade",
            ),
        ]

    def __str__(self):
        return f"{self.grade_level}-{self.name}"
