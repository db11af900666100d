from django.contrib import admin
from .models import Comment, Obituary, Reaction


@admin.register(Obituary)
class ObituaryAdmin(admin.ModelAdmin):
    list_display = ['title', 'founder', 'upvotes', 'roast_score', 'created_at']
    search_fields = ['title', 'blurb', 'founder__handle']
    raw_id_fields = ['founder']


@admin.register(Comment)
class CommentAdmin(admin.ModelAdmin):
    list_display = ['id', 'author', 'obituary', 'parent', 'created_at']
    raw_id_fields = ['author', 'obituary', 'parent']


@admin.register(Reaction)
class ReactionAdmin(admin.ModelAdmin):
    list_display = ['type', 'user', 'obituary', 'comment', 'created_at']
    list_filter = ['type']
    raw_id_fields = ['user', 'obituary', 'comment']
