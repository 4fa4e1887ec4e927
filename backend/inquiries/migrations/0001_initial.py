from django.db import migrations, models
import django.db.models.deletion


INQUIRY_STATUSES = [
    ('draft', 'Draft'),
    ('open', 'Open'),
    ('awarded', 'Awarded'),
    ('closed', 'Closed'),
    ('cancelled', 'Cancelled'),
    ('expired', 'Expired'),
]

SERVICE_TYPES = [
    ('air_freight', 'Air freight'),
    ('sea_freight', 'Sea freight'),
    ('road_freight', 'Road freight'),
    ('rail_freight', 'Rail freight'),
]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('organizations', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Inquiry',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('reference_number', models.CharField(max_length=64, unique=True)),
                ('title', models.CharField(max_length=255)),
                ('description', models.TextField(blank=True, null=True)),
                ('service_type', models.CharField(choices=SERVICE_TYPES, default='air_freight', max_length=20)),
                ('status', models.CharField(choices=INQUIRY_STATUSES, default='draft', max_length=20)),
                ('validity_date', models.DateTimeField(blank=True, null=True)),
                ('sent_at', models.DateTimeField(blank=True, null=True)),
                ('closed_at', models.DateTimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('shipper_organization', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='inquiries', to='organizations.organization')),
            ],
            options={
                'verbose_name_plural': 'inquiries',
                'indexes': [
                    models.Index(fields=['shipper_organization', '-created_at'], name='inquiry_shipper_created_idx'),
                    models.Index(fields=['status', 'validity_date'], name='inquiry_status_validity_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='InquiryPackage',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('package_number', models.CharField(max_length=32)),
                ('description', models.CharField(blank=True, max_length=255, null=True)),
                ('pieces', models.PositiveIntegerField(default=1)),
                ('gross_weight', models.DecimalField(decimal_places=3, max_digits=10)),
                ('chargeable_weight', models.DecimalField(blank=True, decimal_places=3, max_digits=10, null=True)),
                ('length', models.DecimalField(blank=True, decimal_places=2, max_digits=8, null=True)),
                ('width', models.DecimalField(blank=True, decimal_places=2, max_digits=8, null=True)),
                ('height', models.DecimalField(blank=True, decimal_places=2, max_digits=8, null=True)),
                ('volume', models.DecimalField(blank=True, decimal_places=6, max_digits=10, null=True)),
                ('temperature', models.CharField(blank=True, max_length=64, null=True)),
                ('special_handling', models.CharField(blank=True, max_length=255, null=True)),
                ('is_dangerous', models.BooleanField(default=False)),
                ('dangerous_goods_class', models.CharField(blank=True, max_length=16, null=True)),
                ('un_number', models.CharField(blank=True, max_length=16, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('inquiry', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='packages', to='inquiries.inquiry')),
            ],
            options={
                'ordering': ['package_number'],
                'constraints': [
                    models.CheckConstraint(
                        condition=models.Q(('chargeable_weight__isnull', True), ('chargeable_weight__gte', models.F('gross_weight')), _connector='OR'),
                        name='package_chargeable_gte_gross',
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name='InquiryForwarder',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('response_status', models.CharField(choices=[('pending', 'Pending'), ('rejected', 'Rejected'), ('quoted', 'Quoted')], default='pending', max_length=20)),
                ('sent_at', models.DateTimeField(auto_now_add=True)),
                ('viewed_at', models.DateTimeField(blank=True, null=True)),
                ('rejected_at', models.DateTimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('forwarder_organization', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='received_inquiries', to='organizations.organization')),
                ('inquiry', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='forwarder_responses', to='inquiries.inquiry')),
            ],
            options={
                'constraints': [
                    models.UniqueConstraint(fields=('inquiry', 'forwarder_organization'), name='uniq_inquiry_forwarder'),
                ],
            },
        ),
    ]
