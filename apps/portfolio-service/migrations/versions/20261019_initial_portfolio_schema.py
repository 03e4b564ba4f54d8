"""
Initial portfolio schema.

Creates the content tables (projects, technologies and their join table,
profile, experience, education, certifications, fun facts), the admin inbox
tables (connections, feedback, reviews) and the portfolio_stats counters.
"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = 'portfolio_initial_20261019'
down_revision = None
branch_labels = None
depends_on = None


def _timestamp(name: str) -> sa.Column:
    return sa.Column(name, sa.DateTime(timezone=True), nullable=True)


def upgrade() -> None:
    op.create_table(
        'technologies',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('icon_name', sa.String(255), nullable=True),
        sa.Column('category', sa.String(100), nullable=True),
        _timestamp('created_at'),
    )
    op.create_index('idx_technologies_category_name', 'technologies', ['category', 'name'])

    op.create_table(
        'projects',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False, server_default=''),
        sa.Column('image_url', sa.Text(), nullable=True),
        sa.Column('project_url', sa.Text(), nullable=True),
        sa.Column('github_url', sa.Text(), nullable=True),
        sa.Column('live_url', sa.Text(), nullable=True),
        sa.Column('repo_url', sa.Text(), nullable=True),
        sa.Column('is_featured', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('sort_order', sa.Integer(), nullable=False, server_default='0'),
        _timestamp('created_at'),
        _timestamp('updated_at'),
    )
    op.create_index('idx_projects_sort_order', 'projects', ['sort_order'])
    op.create_index('idx_projects_is_featured', 'projects', ['is_featured'])

    op.create_table(
        'project_technologies',
        sa.Column('project_id', sa.String(36), sa.ForeignKey('projects.id'), primary_key=True),
        sa.Column('technology_id', sa.String(36), sa.ForeignKey('technologies.id'), primary_key=True),
    )
    op.create_index('idx_project_technologies_technology_id', 'project_technologies', ['technology_id'])

    op.create_table(
        'connections',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('email', sa.String(320), nullable=False),
        sa.Column('subject', sa.String(255), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default='unread'),
        sa.Column('reply_message', sa.Text(), nullable=True),
        _timestamp('created_at'),
        _timestamp('updated_at'),
        sa.CheckConstraint("status in ('unread','read','replied')", name='ck_connections_status'),
    )
    op.create_index('idx_connections_created_at', 'connections', ['created_at'])
    op.create_index('idx_connections_status', 'connections', ['status'])

    op.create_table(
        'feedback',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('type', sa.String(20), nullable=False, server_default='feedback'),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('priority', sa.String(20), nullable=True),
        sa.Column('status', sa.String(20), nullable=False, server_default='unread'),
        sa.Column('reply_message', sa.Text(), nullable=True),
        sa.Column(
            'connection_id',
            sa.String(36),
            sa.ForeignKey('connections.id', ondelete='SET NULL'),
            nullable=True,
        ),
        _timestamp('created_at'),
        _timestamp('updated_at'),
        sa.CheckConstraint("type in ('feedback','complaint','suggestion')", name='ck_feedback_type'),
        sa.CheckConstraint("status in ('unread','read','replied')", name='ck_feedback_status'),
        sa.CheckConstraint("priority is null or priority in ('low','medium','high')", name='ck_feedback_priority'),
    )
    op.create_index('idx_feedback_created_at', 'feedback', ['created_at'])
    op.create_index('idx_feedback_connection_id', 'feedback', ['connection_id'])

    op.create_table(
        'reviews',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('role', sa.String(255), nullable=False),
        sa.Column('company', sa.String(255), nullable=True),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('rating', sa.Integer(), nullable=True),
        sa.Column('status', sa.String(20), nullable=False, server_default='pending'),
        _timestamp('created_at'),
        _timestamp('updated_at'),
        sa.CheckConstraint("status in ('pending','approved','rejected')", name='ck_reviews_status'),
        sa.CheckConstraint("rating is null or (rating >= 1 and rating <= 5)", name='ck_reviews_rating'),
    )
    op.create_index('idx_reviews_status_created_at', 'reviews', ['status', 'created_at'])

    op.create_table(
        'portfolio_stats',
        sa.Column('metric_name', sa.String(100), primary_key=True),
        sa.Column('metric_value', sa.Integer(), nullable=False, server_default='0'),
        _timestamp('updated_at'),
    )

    op.create_table(
        'profiles',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('full_name', sa.String(255), nullable=False),
        sa.Column('headline', sa.String(255), nullable=True),
        sa.Column('bio', sa.Text(), nullable=True),
        sa.Column('email', sa.String(320), nullable=True),
        sa.Column('location', sa.String(255), nullable=True),
        sa.Column('avatar_url', sa.Text(), nullable=True),
        sa.Column('resume_url', sa.Text(), nullable=True),
        _timestamp('created_at'),
    )

    op.create_table(
        'experiences',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('company', sa.String(255), nullable=False),
        sa.Column('role', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('start_date', sa.String(32), nullable=True),
        sa.Column('end_date', sa.String(32), nullable=True),
        sa.Column('is_current', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('sort_order', sa.Integer(), nullable=False, server_default='0'),
        _timestamp('created_at'),
    )

    op.create_table(
        'experience_technologies',
        sa.Column('experience_id', sa.String(36), sa.ForeignKey('experiences.id'), primary_key=True),
        sa.Column('technology_id', sa.String(36), sa.ForeignKey('technologies.id'), primary_key=True),
    )

    op.create_table(
        'education',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('institution', sa.String(255), nullable=False),
        sa.Column('degree', sa.String(255), nullable=False),
        sa.Column('field_of_study', sa.String(255), nullable=True),
        sa.Column('start_date', sa.String(32), nullable=True),
        sa.Column('end_date', sa.String(32), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('sort_order', sa.Integer(), nullable=False, server_default='0'),
        _timestamp('created_at'),
    )

    op.create_table(
        'certifications',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('issuer', sa.String(255), nullable=False),
        sa.Column('issued_date', sa.String(32), nullable=True),
        sa.Column('credential_url', sa.Text(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('sort_order', sa.Integer(), nullable=False, server_default='0'),
        _timestamp('created_at'),
    )

    op.create_table(
        'fun_facts',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('category', sa.String(100), nullable=False),
        sa.Column('category_icon_name', sa.String(100), nullable=True),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('sort_order', sa.Integer(), nullable=False, server_default='0'),
        _timestamp('created_at'),
    )
    op.create_index('idx_fun_facts_category_sort_order', 'fun_facts', ['category', 'sort_order'])


def downgrade() -> None:
    op.drop_index('idx_fun_facts_category_sort_order', table_name='fun_facts')
    op.drop_table('fun_facts')
    op.drop_table('certifications')
    op.drop_table('education')
    op.drop_table('experience_technologies')
    op.drop_table('experiences')
    op.drop_table('profiles')
    op.drop_table('portfolio_stats')
    op.drop_index('idx_reviews_status_created_at', table_name='reviews')
    op.drop_table('reviews')
    op.drop_index('idx_feedback_connection_id', table_name='feedback')
    op.drop_index('idx_feedback_created_at', table_name='feedback')
    op.drop_table('feedback')
    op.drop_index('idx_connections_status', table_name='connections')
    op.drop_index('idx_connections_created_at', table_name='connections')
    op.drop_table('connections')
    op.drop_index('idx_project_technologies_technology_id', table_name='project_technologies')
    op.drop_table('project_technologies')
    op.drop_index('idx_projects_is_featured', table_name='projects')
    op.drop_index('idx_projects_sort_order', table_name='projects')
    op.drop_table('projects')
    op.drop_index('idx_technologies_category_name', table_name='technologies')
    op.drop_table('technologies')
