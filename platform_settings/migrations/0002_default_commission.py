from django.db import migrations

DEFAULTS = {
    "organizer_commission_percent": "10",
    "platform_commission_percent": "10",
    "prize_pool_percent": "80",
}


def create_default_commission(apps, schema_editor):
    PlatformSetting = apps.get_model("platform_settings", "PlatformSetting")
    for key, value in DEFAULTS.items():
        PlatformSetting.objects.get_or_create(key=key, defaults={"value": value})


class Migration(migrations.Migration):

    dependencies = [
        ("platform_settings", "0001_initial"),
    ]

    operations = [
        migrations.RunPython(create_default_commission, migrations.RunPython.noop),
    ]
