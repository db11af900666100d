from django.contrib import admin
from django.contrib.auth.admin import UserAdmin
from .models import Account, Profile


@admin.register(Account)
class AccountAdmin(UserAdmin):
    list_display = ['username', 'email', 'is_active', 'is_deleted', 'date_joined']
    list_filter = ['is_active', 'is_deleted', 'is_staff']
    fieldsets = UserAdmin.fieldsets + (('Lifecycle', {'fields': ('is_deleted',)}),)


@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
    list_display = ['handle', 'email', 'karma', 'timezone', 'created_at']
    search_fields = ['handle', 'email']
