from django.contrib import admin

from training.models import Category, ClassSession, Registration, TrainingClass


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ["code", "display_name", "tenant_id", "sort_order", "active"]
    list_filter = ["tenant_id", "active"]
    search_fields = ["code", "name", "display_name"]


@admin.register(TrainingClass)
class TrainingClassAdmin(admin.ModelAdmin):
    list_display = ["code", "name", "tenant_id", "level", "category", "tuition", "active"]
    list_filter = ["tenant_id", "level", "active"]
    search_fields = ["code", "name", "summary"]


@admin.register(ClassSession)
class ClassSessionAdmin(admin.ModelAdmin):
    list_display = [
        "code",
        "class_code",
        "tenant_id",
        "date",
        "start_time",
        "max_seats",
        "available_seats",
        "status",
    ]
    list_filter = ["tenant_id", "status"]
    # Seat counts move only through the capacity service.
    readonly_fields = ["available_seats"]


@admin.register(Registration)
class RegistrationAdmin(admin.ModelAdmin):
    list_display = ["id", "email", "tenant_id", "class_code", "session_code", "status", "created_at"]
    list_filter = ["tenant_id", "status"]
    search_fields = ["email", "transaction_id", "last_name"]
