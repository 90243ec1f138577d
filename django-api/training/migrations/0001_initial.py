from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Category",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("tenant_id", models.PositiveIntegerField()),
                ("code", models.CharField(max_length=64)),
                ("name", models.CharField(max_length=255)),
                ("display_name", models.CharField(max_length=255)),
                ("icon", models.CharField(blank=True, max_length=100, null=True)),
                ("sort_order", models.IntegerField(default=0)),
                ("active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "db_table": "training_categories",
                "constraints": [
                    models.UniqueConstraint(fields=("tenant_id", "code"), name="training_category_code_uniq"),
                ],
            },
        ),
        migrations.CreateModel(
            name="TrainingClass",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("tenant_id", models.PositiveIntegerField()),
                ("code", models.CharField(max_length=64)),
                ("name", models.CharField(max_length=255)),
                ("level", models.CharField(max_length=50)),
                ("duration", models.CharField(max_length=100)),
                ("tuition", models.DecimalField(decimal_places=2, max_digits=10)),
                ("category", models.CharField(default="other", max_length=64)),
                ("sort_order", models.IntegerField(default=0)),
                ("badge", models.CharField(blank=True, max_length=100, null=True)),
                ("summary", models.TextField(blank=True, null=True)),
                ("description", models.TextField(blank=True, null=True)),
                ("highlights", models.TextField(blank=True, null=True)),
                ("equipment", models.TextField(blank=True, null=True)),
                ("prerequisites", models.TextField(blank=True, null=True)),
                ("active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "db_table": "training_classes",
                "indexes": [
                    models.Index(fields=["tenant_id", "category"], name="training_class_cat_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(fields=("tenant_id", "code"), name="training_class_code_uniq"),
                    models.CheckConstraint(condition=models.Q(tuition__gte=0), name="training_class_tuition_gte_0"),
                ],
            },
        ),
        migrations.CreateModel(
            name="ClassSession",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("tenant_id", models.PositiveIntegerField()),
                ("code", models.CharField(max_length=64)),
                ("class_code", models.CharField(max_length=64)),
                ("date", models.DateField()),
                ("start_time", models.TimeField()),
                ("end_time", models.TimeField()),
                ("location", models.CharField(blank=True, max_length=255, null=True)),
                ("instructor", models.CharField(blank=True, max_length=255, null=True)),
                ("max_seats", models.IntegerField(default=12)),
                ("available_seats", models.IntegerField(default=12)),
                (
                    "status",
                    models.CharField(
                        choices=[("scheduled", "Scheduled"), ("full", "Full"), ("cancelled", "Cancelled")],
                        default="scheduled",
                        max_length=20,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "db_table": "training_class_sessions",
                "indexes": [
                    models.Index(fields=["tenant_id", "class_code", "date"], name="training_session_class_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(fields=("tenant_id", "code"), name="training_session_code_uniq"),
                    models.CheckConstraint(condition=models.Q(max_seats__gt=0), name="training_session_max_gt_0"),
                    models.CheckConstraint(condition=models.Q(available_seats__gte=0), name="training_session_avail_gte_0"),
                    models.CheckConstraint(
                        condition=models.Q(available_seats__lte=models.F("max_seats")),
                        name="training_session_avail_lte_max",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(status__in=["scheduled", "full", "cancelled"]),
                        name="training_session_status_valid",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="Registration",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("tenant_id", models.PositiveIntegerField()),
                ("transaction_id", models.CharField(max_length=100)),
                ("class_code", models.CharField(max_length=64)),
                ("session_code", models.CharField(max_length=64)),
                ("first_name", models.CharField(max_length=100)),
                ("last_name", models.CharField(max_length=100)),
                ("email", models.CharField(max_length=255)),
                ("phone", models.CharField(blank=True, default="", max_length=50)),
                ("experience_level", models.CharField(blank=True, default="", max_length=50)),
                ("amount", models.DecimalField(decimal_places=2, default=0, max_digits=10)),
                ("status", models.CharField(default="confirmed", max_length=20)),
                ("auth_code", models.CharField(blank=True, max_length=100, null=True)),
                ("waiver_accepted", models.BooleanField(default=False)),
                ("rules_accepted", models.BooleanField(default=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "db_table": "training_registrations",
                "indexes": [
                    models.Index(fields=["tenant_id", "session_code"], name="training_reg_session_idx"),
                    models.Index(fields=["tenant_id", "email"], name="training_reg_email_idx"),
                    models.Index(fields=["tenant_id", "-created_at"], name="training_reg_created_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(condition=models.Q(amount__gte=0), name="training_reg_amount_gte_0"),
                ],
            },
        ),
    ]
