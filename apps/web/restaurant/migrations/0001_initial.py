import datetime

from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Restaurant",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=200)),
                ("description", models.TextField(blank=True)),
                ("cuisine", models.JSONField(blank=True, default=list, help_text='List of cuisines (e.g., ["North Indian", "Chinese"])')),
                ("image_url", models.URLField(blank=True)),
                ("street", models.CharField(max_length=255)),
                ("city", models.CharField(max_length=100)),
                ("state", models.CharField(max_length=100)),
                ("pincode", models.CharField(max_length=20)),
                ("latitude", models.FloatField(default=0)),
                ("longitude", models.FloatField(default=0)),
                ("fssai_license_number", models.CharField(max_length=50)),
                ("gst_number", models.CharField(blank=True, max_length=50)),
                ("status", models.CharField(choices=[("pending", "Pending"), ("pending_approval", "Pending Approval"), ("approved", "Approved"), ("rejected", "Rejected")], default="pending", max_length=20)),
                ("is_open", models.BooleanField(default=True)),
                ("opening_time", models.TimeField(default=datetime.time(9, 0))),
                ("closing_time", models.TimeField(default=datetime.time(22, 0))),
                ("total_rating_sum", models.PositiveIntegerField(default=16)),
                ("total_rating_count", models.PositiveIntegerField(default=4)),
                ("average_rating", models.FloatField(default=4.0)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["status"], name="restaurant_status_idx"),
                    models.Index(fields=["city"], name="restaurant_city_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="MenuItem",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("name", models.CharField(max_length=200)),
                ("description", models.TextField(blank=True)),
                ("price", models.DecimalField(decimal_places=2, max_digits=10)),
                ("category", models.CharField(max_length=100)),
                ("image_url", models.URLField(blank=True)),
                ("is_available", models.BooleanField(default=True)),
                ("restaurant", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="%(class)ss", to="restaurant.restaurant")),
            ],
            options={
                "ordering": ["category", "name"],
                "indexes": [
                    models.Index(fields=["restaurant", "category"], name="menuitem_rest_category_idx"),
                    models.Index(fields=["restaurant", "is_available"], name="menuitem_rest_available_idx"),
                ],
            },
        ),
    ]
