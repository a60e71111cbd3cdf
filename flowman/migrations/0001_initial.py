"""
Initial migration for Flowman models.
"""

from decimal import Decimal
import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):
    """Create Flowman models: Location, StorageLocation, PalletNumber, Document, Resource, Position, Move."""

    initial = True

    dependencies = [
        ('contenttypes', '0002_remove_content_type_name'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Location',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('code', models.SlugField(help_text='Identificador único (ex: deposito, loja)', unique=True, verbose_name='Código')),
                ('name', models.CharField(help_text='Nome legível do local', max_length=100, verbose_name='Nome')),
                ('kind', models.CharField(choices=[('physical', 'Físico'), ('virtual', 'Virtual')], default='physical', max_length=20, verbose_name='Tipo')),
                ('metadata', models.JSONField(blank=True, default=dict, verbose_name='Metadados')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('receipt_location', models.ForeignKey(blank=True, help_text='Se preenchido, liberações deste local geram um recebimento vinculado lá.', null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to='flowman.location', verbose_name='Local de recebimento')),
            ],
            options={
                'verbose_name': 'Local',
                'verbose_name_plural': 'Locais',
                'ordering': ['code'],
            },
        ),
        migrations.CreateModel(
            name='PalletNumber',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('number', models.CharField(max_length=50, unique=True, verbose_name='Número')),
            ],
            options={
                'verbose_name': 'Número de palete',
                'verbose_name_plural': 'Números de palete',
                'ordering': ['number'],
            },
        ),
        migrations.CreateModel(
            name='StorageLocation',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('number', models.CharField(max_length=50, verbose_name='Número')),
                ('location', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='storage_locations', to='flowman.location', verbose_name='Local')),
            ],
            options={
                'verbose_name': 'Endereço de armazenagem',
                'verbose_name_plural': 'Endereços de armazenagem',
                'ordering': ['location', 'number'],
            },
        ),
        migrations.CreateModel(
            name='Document',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('number', models.CharField(blank=True, default='', max_length=50, verbose_name='Número')),
                ('type', models.CharField(choices=[('receipt', 'Recebimento'), ('internal_inbound', 'Entrada interna'), ('internal_outbound', 'Saída interna'), ('transfer', 'Transferência'), ('release', 'Liberação'), ('return', 'Devolução')], default='', max_length=20, verbose_name='Tipo')),
                ('state', models.CharField(choices=[('draft', 'Rascunho'), ('accepted', 'Aceito')], db_index=True, default='draft', max_length=20, verbose_name='Estado')),
                ('time', models.DateTimeField(db_index=True, default=django.utils.timezone.now, verbose_name='Data/Hora')),
                ('description', models.TextField(blank=True, default='', verbose_name='Descrição')),
                ('metadata', models.JSONField(blank=True, default=dict, verbose_name='Metadados')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('linked_document', models.ForeignKey(blank=True, help_text='Recebimento gerado automaticamente a partir desta liberação', null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='source_documents', to='flowman.document', verbose_name='Documento vinculado')),
                ('location_from', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='outbound_documents', to='flowman.location', verbose_name='Local de origem')),
                ('location_to', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='inbound_documents', to='flowman.location', verbose_name='Local de destino')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='+', to=settings.AUTH_USER_MODEL, verbose_name='Usuário')),
            ],
            options={
                'verbose_name': 'Documento',
                'verbose_name_plural': 'Documentos',
                'ordering': ['-time'],
            },
        ),
        migrations.CreateModel(
            name='Resource',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('object_id', models.PositiveIntegerField(verbose_name='ID do Produto')),
                ('type_of_pallet', models.CharField(blank=True, default='', max_length=50, verbose_name='Tipo de palete')),
                ('batch', models.CharField(blank=True, default='', max_length=50, verbose_name='Lote')),
                ('price', models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True, verbose_name='Preço')),
                ('production_date', models.DateField(blank=True, null=True, verbose_name='Data de Produção')),
                ('expiration_date', models.DateField(blank=True, db_index=True, null=True, verbose_name='Data de Validade')),
                ('_quantity', models.DecimalField(decimal_places=3, default=Decimal('0'), max_digits=12, verbose_name='Quantidade')),
                ('metadata', models.JSONField(blank=True, default=dict)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('content_type', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, to='contenttypes.contenttype', verbose_name='Tipo de Produto')),
                ('document', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='resources', to='flowman.document', verbose_name='Documento de origem')),
                ('location', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='resources', to='flowman.location', verbose_name='Local')),
                ('pallet_number', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='resources', to='flowman.palletnumber', verbose_name='Número de palete')),
                ('storage_location', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='resources', to='flowman.storagelocation', verbose_name='Endereço de armazenagem')),
            ],
            options={
                'verbose_name': 'Recurso',
                'verbose_name_plural': 'Recursos',
            },
        ),
        migrations.CreateModel(
            name='Position',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('number', models.PositiveIntegerField(default=0, help_text='Ordem da posição no documento', verbose_name='Número')),
                ('object_id', models.PositiveIntegerField(verbose_name='ID do Produto')),
                ('quantity', models.DecimalField(decimal_places=3, max_digits=12, verbose_name='Quantidade')),
                ('given_quantity', models.DecimalField(blank=True, decimal_places=3, max_digits=12, null=True, verbose_name='Quantidade informada')),
                ('given_unit', models.CharField(blank=True, default='', max_length=20, verbose_name='Unidade informada')),
                ('conversion', models.DecimalField(blank=True, decimal_places=5, max_digits=12, null=True, verbose_name='Conversão')),
                ('price', models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True, verbose_name='Preço')),
                ('batch', models.CharField(blank=True, default='', max_length=50, verbose_name='Lote')),
                ('production_date', models.DateField(blank=True, null=True, verbose_name='Data de Produção')),
                ('expiration_date', models.DateField(blank=True, null=True, verbose_name='Data de Validade')),
                ('type_of_pallet', models.CharField(blank=True, default='', max_length=50, verbose_name='Tipo de palete')),
                ('additional_code', models.CharField(blank=True, default='', max_length=50, verbose_name='Código adicional')),
                ('waste', models.BooleanField(default=False, verbose_name='Resíduo')),
                ('content_type', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, to='contenttypes.contenttype', verbose_name='Tipo de Produto')),
                ('document', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='positions', to='flowman.document', verbose_name='Documento')),
                ('pallet_number', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='positions', to='flowman.palletnumber', verbose_name='Número de palete')),
                ('resource', models.ForeignKey(blank=True, help_text='Saídas: lote específico. Entradas: preenchido ao aceitar.', null=True, on_delete=django.db.models.deletion.PROTECT, related_name='positions', to='flowman.resource', verbose_name='Recurso')),
                ('storage_location', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='positions', to='flowman.storagelocation', verbose_name='Endereço de armazenagem')),
            ],
            options={
                'verbose_name': 'Posição',
                'verbose_name_plural': 'Posições',
                'ordering': ['document', 'number', 'id'],
            },
        ),
        migrations.CreateModel(
            name='Move',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('delta', models.DecimalField(decimal_places=3, help_text='Positivo = entrada, Negativo = saída', max_digits=12, verbose_name='Variação')),
                ('reason', models.CharField(help_text='Ex: "Recebimento #12", "Liberação #40"', max_length=255, verbose_name='Motivo')),
                ('metadata', models.JSONField(blank=True, default=dict, verbose_name='Metadados')),
                ('timestamp', models.DateTimeField(db_index=True, default=django.utils.timezone.now, verbose_name='Data/Hora')),
                ('position', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='moves', to='flowman.position', verbose_name='Posição')),
                ('resource', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='moves', to='flowman.resource', verbose_name='Recurso')),
                ('user', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, to=settings.AUTH_USER_MODEL, verbose_name='Usuário')),
            ],
            options={
                'verbose_name': 'Movimento',
                'verbose_name_plural': 'Movimentos',
                'ordering': ['timestamp'],
            },
        ),
        # Indexes
        migrations.AddConstraint(
            model_name='storagelocation',
            constraint=models.UniqueConstraint(fields=('location', 'number'), name='unique_storage_location_number'),
        ),
        migrations.AddIndex(
            model_name='document',
            index=models.Index(fields=['type', 'state'], name='flowman_doc_type_state_idx'),
        ),
        migrations.AddIndex(
            model_name='resource',
            index=models.Index(fields=['content_type', 'object_id'], name='flowman_res_product_idx'),
        ),
        migrations.AddIndex(
            model_name='resource',
            index=models.Index(fields=['location', 'content_type', 'object_id'], name='flowman_res_loc_product_idx'),
        ),
        migrations.AddIndex(
            model_name='position',
            index=models.Index(fields=['content_type', 'object_id'], name='flowman_pos_product_idx'),
        ),
        migrations.AddIndex(
            model_name='move',
            index=models.Index(fields=['resource', 'timestamp'], name='flowman_move_res_ts_idx'),
        ),
    ]
