from django.contrib import admin

from .models import DailyStats, Post


@admin.register(Post)
class PostAdmin(admin.ModelAdmin):
    list_display = ("id", "title", "author", "status", "published_at", "view_count", "like_count")
    list_filter = ("status", "created_at")
    search_fields = ("id", "title", "author__username")
    ordering = ("-created_at",)


@admin.register(DailyStats)
class DailyStatsAdmin(admin.ModelAdmin):
    list_display = ("post", "date", "views")
    list_filter = ("date",)
    ordering = ("-date",)
