from django.contrib.auth.models import AbstractUser
from django.db import models


class User(AbstractUser):
    ROLE_CHOICES = [
        ("admin", "Admin"),
        ("manager", "Manager"),
        ("front_office", "Front Office"),
        ("warehouse", "Warehouse"),
    ]

    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default="warehouse")
    phone = models.CharField(max_length=20, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "users"
        verbose_name = "User"
        verbose_name_plural = "Users"

    def __str__(self):
        return f"{self.username} ({self.get_role_display()})"

    @property
    def full_name(self):
        return self.get_full_name() or self.username

    @property
    def is_admin(self):
        return self.role == "admin" or self.is_superuser

    @property
    def is_manager(self):
        return self.role == "manager"

    @property
    def is_front_office(self):
        return self.role == "front_office"

    @property
    def can_approve_partial_fulfillment(self):
        return self.is_admin or self.is_manager

    @property
    def can_authorize_unshipped_items(self):
        return self.is_admin or self.is_manager or self.is_front_office
