"""initial schema

Revision ID: 9c41d2e7a100
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = '9c41d2e7a100'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('username', sa.String(), nullable=False),
        sa.Column('password', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('bio', sa.Text(), nullable=True),
        sa.Column('profile_image', sa.String(), nullable=True),
        sa.Column('stripe_customer_id', sa.String(), nullable=True),
        sa.Column('stripe_account_id', sa.String(), nullable=True),
        sa.Column('stripe_subscription_id', sa.String(), nullable=True),
        sa.Column('subscription_tier', sa.String(), nullable=True),
        sa.Column('subscription_start_date', sa.DateTime(), nullable=True),
        sa.Column('subscription_end_date', sa.DateTime(), nullable=True),
        sa.Column('is_active_filmmaker', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('verification_status', sa.String(), server_default='unverified', nullable=False),
        sa.Column('verification_documents', postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column('trust_score', sa.Integer(), server_default='0', nullable=False),
        sa.Column('strikes', sa.Integer(), server_default='0', nullable=False),
        sa.Column('is_banned', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('is_admin', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_users_id'), 'users', ['id'], unique=False)
    op.create_index(op.f('ix_users_username'), 'users', ['username'], unique=True)
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)
    op.create_index(op.f('ix_users_stripe_customer_id'), 'users', ['stripe_customer_id'], unique=False)
    op.create_index(op.f('ix_users_is_admin'), 'users', ['is_admin'], unique=False)

    op.create_table(
        'videos',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('video_url', sa.String(), nullable=False),
        sa.Column('thumbnail_url', sa.String(), nullable=True),
        sa.Column('duration', sa.Integer(), nullable=True),
        sa.Column('upload_date', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('is_published', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('metadata', postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column('moderation_status', sa.String(), server_default='pending', nullable=False),
        sa.Column('moderation_notes', sa.Text(), nullable=True),
        sa.Column('ai_screening_result', postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column('ai_screening_score', sa.Float(), nullable=True),
        sa.Column('moderated_by', sa.Integer(), nullable=True),
        sa.Column('moderated_at', sa.DateTime(), nullable=True),
        sa.Column('content_rating', sa.String(), nullable=True),
        sa.Column('content_warnings', postgresql.ARRAY(sa.String()), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_videos_id'), 'videos', ['id'], unique=False)
    op.create_index(op.f('ix_videos_user_id'), 'videos', ['user_id'], unique=False)
    op.create_index(op.f('ix_videos_upload_date'), 'videos', ['upload_date'], unique=False)
    op.create_index(op.f('ix_videos_moderation_status'), 'videos', ['moderation_status'], unique=False)

    op.create_table(
        'platforms',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('logo_url', sa.String(), nullable=True),
        sa.Column('api_endpoint', sa.String(), nullable=True),
        sa.Column('content_policies', postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column('restricted_content', postgresql.ARRAY(sa.String()), nullable=True),
        sa.Column('required_documents', postgresql.ARRAY(sa.String()), nullable=True),
        sa.Column('rating_system', sa.String(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_platforms_id'), 'platforms', ['id'], unique=False)

    op.create_table(
        'distributions',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('video_id', sa.Integer(), nullable=False),
        sa.Column('platform_id', sa.Integer(), nullable=False),
        sa.Column('status', sa.String(), server_default='pending', nullable=False),
        sa.Column('distribution_date', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('views', sa.Integer(), server_default='0', nullable=False),
        sa.Column('revenue', sa.Float(), server_default='0', nullable=False),
        sa.Column('external_id', sa.String(), nullable=True),
        sa.Column('submission_date', sa.DateTime(), nullable=True),
        sa.Column('approval_date', sa.DateTime(), nullable=True),
        sa.Column('rejection_reason', sa.Text(), nullable=True),
        sa.Column('processing_progress', sa.Integer(), nullable=True),
        sa.Column('last_status_update', sa.DateTime(), nullable=True),
        sa.Column('distribution_url', sa.String(), nullable=True),
        sa.ForeignKeyConstraint(['video_id'], ['videos.id'], ),
        sa.ForeignKeyConstraint(['platform_id'], ['platforms.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_distributions_id'), 'distributions', ['id'], unique=False)
    op.create_index(op.f('ix_distributions_video_id'), 'distributions', ['video_id'], unique=False)
    op.create_index(op.f('ix_distributions_platform_id'), 'distributions', ['platform_id'], unique=False)

    op.create_table(
        'revenues',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('video_id', sa.Integer(), nullable=False),
        sa.Column('platform_id', sa.Integer(), nullable=False),
        sa.Column('date', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('amount', sa.Float(), nullable=False),
        sa.Column('views', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['video_id'], ['videos.id'], ),
        sa.ForeignKeyConstraint(['platform_id'], ['platforms.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_revenues_id'), 'revenues', ['id'], unique=False)
    op.create_index(op.f('ix_revenues_video_id'), 'revenues', ['video_id'], unique=False)
    op.create_index('idx_revenues_video_date', 'revenues', ['video_id', 'date'], unique=False)

    op.create_table(
        'subscription_plans',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('price', sa.Integer(), nullable=False),
        sa.Column('duration_months', sa.Integer(), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_subscription_plans_id'), 'subscription_plans', ['id'], unique=False)

    op.create_table(
        'revenue_statements',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('month', sa.Integer(), nullable=False),
        sa.Column('year', sa.Integer(), nullable=False),
        sa.Column('total_revenue', sa.Integer(), nullable=False),
        sa.Column('platform_fee', sa.Integer(), nullable=False),
        sa.Column('net_revenue', sa.Integer(), nullable=False),
        sa.Column('is_paid', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('payment_date', sa.DateTime(), nullable=True),
        sa.Column('statement_url', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_revenue_statements_id'), 'revenue_statements', ['id'], unique=False)
    op.create_index(op.f('ix_revenue_statements_user_id'), 'revenue_statements', ['user_id'], unique=False)
    op.create_index('idx_revenue_statements_user_period', 'revenue_statements', ['user_id', 'year', 'month'], unique=False)

    op.create_table(
        'content_reports',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('video_id', sa.Integer(), nullable=False),
        sa.Column('reporter_id', sa.Integer(), nullable=True),
        sa.Column('report_reason', sa.String(), nullable=False),
        sa.Column('report_details', sa.Text(), nullable=True),
        sa.Column('reported_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('status', sa.String(), server_default='pending', nullable=False),
        sa.Column('reviewed_by', sa.Integer(), nullable=True),
        sa.Column('reviewed_at', sa.DateTime(), nullable=True),
        sa.Column('resolution', sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_content_reports_id'), 'content_reports', ['id'], unique=False)
    op.create_index(op.f('ix_content_reports_video_id'), 'content_reports', ['video_id'], unique=False)
    op.create_index(op.f('ix_content_reports_status'), 'content_reports', ['status'], unique=False)

    op.create_table(
        'moderation_queue',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('video_id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('added_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('priority', sa.String(), server_default='normal', nullable=False),
        sa.Column('ai_screening_completed', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('human_review_required', sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column('assigned_to', sa.Integer(), nullable=True),
        sa.Column('status', sa.String(), server_default='pending', nullable=False),
        sa.Column('platform_specific_flags', postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_moderation_queue_id'), 'moderation_queue', ['id'], unique=False)
    op.create_index(op.f('ix_moderation_queue_video_id'), 'moderation_queue', ['video_id'], unique=True)
    op.create_index(op.f('ix_moderation_queue_status'), 'moderation_queue', ['status'], unique=False)

    op.create_table(
        'filmmaker_contacts',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('film_title', sa.String(), nullable=True),
        sa.Column('submission_year', sa.Integer(), nullable=True),
        sa.Column('film_category', sa.String(), nullable=True),
        sa.Column('film_festival_year', sa.Integer(), nullable=True),
        sa.Column('additional_info', postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column('date_added', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('invitation_sent', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('invitation_sent_at', sa.DateTime(), nullable=True),
        sa.Column('last_invitation_sent_at', sa.DateTime(), nullable=True),
        sa.Column('invitation_count', sa.Integer(), server_default='0', nullable=False),
        sa.Column('has_registered', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('registered_at', sa.DateTime(), nullable=True),
        sa.Column('registered_user_id', sa.Integer(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('last_email_opened', sa.DateTime(), nullable=True),
        sa.Column('last_email_clicked', sa.DateTime(), nullable=True),
        sa.Column('tags', postgresql.ARRAY(sa.String()), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_filmmaker_contacts_id'), 'filmmaker_contacts', ['id'], unique=False)
    op.create_index(op.f('ix_filmmaker_contacts_email'), 'filmmaker_contacts', ['email'], unique=True)
    op.create_index(op.f('ix_filmmaker_contacts_date_added'), 'filmmaker_contacts', ['date_added'], unique=False)

    op.create_table(
        'magazine_subscriptions',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('status', sa.String(), server_default='active', nullable=False),
        sa.Column('start_date', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('end_date', sa.DateTime(), nullable=True),
        sa.Column('stripe_subscription_id', sa.String(), nullable=True),
        sa.Column('payment_method', sa.String(), nullable=True),
        sa.Column('price', sa.Integer(), server_default='399', nullable=False),
        sa.Column('invoice_sent', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('invoice_sent_date', sa.DateTime(), nullable=True),
        sa.Column('payment_received', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('payment_received_date', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_magazine_subscriptions_id'), 'magazine_subscriptions', ['id'], unique=False)
    op.create_index(op.f('ix_magazine_subscriptions_user_id'), 'magazine_subscriptions', ['user_id'], unique=False)
    op.create_index(op.f('ix_magazine_subscriptions_status'), 'magazine_subscriptions', ['status'], unique=False)
    op.create_index(op.f('ix_magazine_subscriptions_created_at'), 'magazine_subscriptions', ['created_at'], unique=False)

    op.create_table(
        'magazine_issues',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('issue_date', sa.DateTime(), nullable=False),
        sa.Column('cover_image_url', sa.String(), nullable=True),
        sa.Column('issuu_link', sa.String(), nullable=True),
        sa.Column('is_published', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_magazine_issues_id'), 'magazine_issues', ['id'], unique=False)
    op.create_index(op.f('ix_magazine_issues_issue_date'), 'magazine_issues', ['issue_date'], unique=False)

    op.create_table(
        'magazine_subscriber_info',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('subscription_id', sa.Integer(), nullable=False),
        sa.Column('full_name', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('phone_number', sa.String(), nullable=False),
        sa.Column('mailing_address', sa.String(), nullable=False),
        sa.Column('city', sa.String(), nullable=False),
        sa.Column('state', sa.String(), nullable=False),
        sa.Column('zip_code', sa.String(), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_magazine_subscriber_info_id'), 'magazine_subscriber_info', ['id'], unique=False)
    op.create_index(op.f('ix_magazine_subscriber_info_subscription_id'), 'magazine_subscriber_info', ['subscription_id'], unique=True)

    op.create_table(
        'email_templates',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('subject', sa.String(), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('created_by', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_by', sa.Integer(), nullable=True),
        sa.Column('is_archived', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_table(
        'email_drafts',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('subject', sa.String(), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('recipients', postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column('created_by', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('template_id', sa.String(), nullable=True),
        sa.ForeignKeyConstraint(['template_id'], ['email_templates.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_email_drafts_created_by'), 'email_drafts', ['created_by'], unique=False)

    op.create_table(
        'email_sent',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('subject', sa.String(), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('recipients', postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column('sent_by', sa.Integer(), nullable=False),
        sa.Column('sent_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('template_id', sa.String(), nullable=True),
        sa.Column('opens', sa.Integer(), server_default='0', nullable=False),
        sa.Column('clicks', sa.Integer(), server_default='0', nullable=False),
        sa.Column('status', sa.String(), server_default='sent', nullable=False),
        sa.ForeignKeyConstraint(['template_id'], ['email_templates.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_email_sent_sent_by'), 'email_sent', ['sent_by'], unique=False)
    op.create_index(op.f('ix_email_sent_sent_at'), 'email_sent', ['sent_at'], unique=False)

    op.create_table(
        'visitor_counter',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('count', sa.Integer(), server_default='0', nullable=False),
        sa.Column('last_updated', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )


def downgrade():
    op.drop_table('visitor_counter')
    op.drop_index(op.f('ix_email_sent_sent_at'), table_name='email_sent')
    op.drop_index(op.f('ix_email_sent_sent_by'), table_name='email_sent')
    op.drop_table('email_sent')
    op.drop_index(op.f('ix_email_drafts_created_by'), table_name='email_drafts')
    op.drop_table('email_drafts')
    op.drop_table('email_templates')
    op.drop_table('magazine_subscriber_info')
    op.drop_table('magazine_issues')
    op.drop_table('magazine_subscriptions')
    op.drop_table('filmmaker_contacts')
    op.drop_table('moderation_queue')
    op.drop_table('content_reports')
    op.drop_table('revenue_statements')
    op.drop_table('subscription_plans')
    op.drop_table('revenues')
    op.drop_table('distributions')
    op.drop_table('platforms')
    op.drop_table('videos')
    op.drop_table('users')
