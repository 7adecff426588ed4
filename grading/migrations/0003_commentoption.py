from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ("grading", "0002_seed_default_scale"),
    ]

    operations = [
        migrations.CreateModel(
            name="CommentOption",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("option_type", models.CharField(choices=[("conduct", "Conduct"), ("attitude", "Attitude"), ("interest", "Interest"), ("teacher", "Teacher's comment")], max_length=16)),
                ("option_value", models.CharField(max_length=255)),
                ("sort_order", models.PositiveSmallIntegerField(default=0)),
                ("is_active", models.BooleanField(default=True)),
            ],
            options={
                "ordering": ["option_type", "sort_order"],
            },
        ),
    ]
