from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ('organizations', '0001_initial'),
        ('inquiries', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Quotation',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('quotation_number', models.CharField(max_length=64, unique=True)),
                ('total_price', models.DecimalField(decimal_places=2, max_digits=12)),
                ('currency', models.CharField(default='EUR', max_length=3)),
                ('pre_carriage', models.DecimalField(decimal_places=2, default=0, max_digits=12)),
                ('main_carriage', models.DecimalField(decimal_places=2, default=0, max_digits=12)),
                ('on_carriage', models.DecimalField(decimal_places=2, default=0, max_digits=12)),
                ('additional_charges', models.DecimalField(decimal_places=2, default=0, max_digits=12)),
                ('transit_time', models.PositiveIntegerField(blank=True, null=True)),
                ('valid_until', models.DateTimeField()),
                ('notes', models.TextField(blank=True, null=True)),
                ('terms', models.TextField(blank=True, null=True)),
                ('status', models.CharField(choices=[('draft', 'Draft'), ('submitted', 'Submitted'), ('accepted', 'Accepted'), ('rejected', 'Rejected'), ('withdrawn', 'Withdrawn'), ('expired', 'Expired')], default='draft', max_length=20)),
                ('submitted_at', models.DateTimeField(blank=True, null=True)),
                ('responded_at', models.DateTimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, to=settings.AUTH_USER_MODEL)),
                ('forwarder_organization', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='quotations', to='organizations.organization')),
                ('inquiry', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='quotations', to='inquiries.inquiry')),
            ],
            options={
                'indexes': [
                    models.Index(fields=['forwarder_organization', 'created_at'], name='quotation_fwd_created_idx'),
                ],
                'constraints': [
                    models.UniqueConstraint(fields=('inquiry', 'forwarder_organization'), name='uniq_quotation_inquiry_forwarder'),
                    models.UniqueConstraint(condition=models.Q(('status', 'accepted')), fields=('inquiry',), name='uniq_accepted_quotation_per_inquiry'),
                ],
            },
        ),
    ]
