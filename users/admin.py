from django.contrib import admin

from .models import User


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ("id", "username", "name", "email", "created_at")
    search_fields = ("id", "username", "name", "email", "token_identifier")
    ordering = ("-created_at",)
