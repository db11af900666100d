import django.db.models.deletion
from django.db import migrations, models
import uuid


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('identity', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Obituary',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('title', models.CharField(max_length=200)),
                ('blurb', models.CharField(max_length=120)),
                ('causes', models.JSONField(blank=True, default=list)),
                ('story_md', models.TextField()),
                ('media_urls', models.JSONField(blank=True, default=list)),
                ('upvotes', models.IntegerField(default=0)),
                ('roast_score', models.IntegerField(default=0)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('founder', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='obituaries', to='identity.profile')),
            ],
            options={
                'db_table': 'Obituary',
                'ordering': ['-created_at'],
                'verbose_name_plural': 'obituaries',
            },
        ),
        migrations.CreateModel(
            name='Comment',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('content', models.TextField(blank=True)),
                ('media_urls', models.JSONField(blank=True, default=list)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('author', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='comments', to='identity.profile')),
                ('obituary', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='comments', to='obituaries.obituary')),
                ('parent', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name='replies', to='obituaries.comment')),
            ],
            options={
                'db_table': 'Comment',
                'ordering': ['created_at'],
            },
        ),
        migrations.CreateModel(
            name='Reaction',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('type', models.CharField(choices=[('🔥', 'Fire'), ('💀', 'Skull'), ('😭', 'Crying'), ('🤯', 'Mind Blown'), ('🧠', 'Big Brain'), ('save', 'Saved'), ('❤️', 'Comment Like')], max_length=16)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('comment', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name='reactions', to='obituaries.comment')),
                ('obituary', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name='reactions', to='obituaries.obituary')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='reactions', to='identity.profile')),
            ],
            options={
                'db_table': 'Reaction',
                'ordering': ['-created_at'],
                'constraints': [
                    models.UniqueConstraint(condition=models.Q(('obituary__isnull', False)), fields=('user', 'type', 'obituary'), name='unique_obituary_reaction'),
                    models.UniqueConstraint(condition=models.Q(('comment__isnull', False)), fields=('user', 'type', 'comment'), name='unique_comment_reaction'),
                ],
            },
        ),
    ]
