"""initial schema: products, variants, students, accounts

Revision ID: 3f2a9c1d7b10
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '3f2a9c1d7b10'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'products',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('price', sa.Numeric(12, 2), nullable=False),
        sa.Column('category', sa.String(length=50), nullable=False),
        sa.Column('brand', sa.String(length=255), nullable=True),
        sa.Column('tags', sa.JSON(), nullable=True),
        sa.Column('rating_average', sa.Float(), nullable=False),
        sa.Column('rating_count', sa.Integer(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('is_featured', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('ix_products_is_active', 'products', ['is_active'])
    op.create_index('ix_products_created_at', 'products', ['created_at'])
    op.create_index('ix_products_category_price', 'products', ['category', 'price'])

    op.create_table(
        'variants',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column(
            'product_id',
            sa.Integer(),
            sa.ForeignKey('products.id', ondelete='CASCADE'),
            nullable=False,
        ),
        sa.Column('color', sa.String(length=100), nullable=False),
        sa.Column('size', sa.String(length=20), nullable=False),
        sa.Column('stock', sa.Integer(), nullable=False),
        sa.Column('sku', sa.String(length=64), nullable=True, unique=True),
        sa.Column('images', sa.JSON(), nullable=True),
        sa.Column('position', sa.Integer(), nullable=True),
        sa.CheckConstraint('stock >= 0', name='ck_variant_stock_non_negative'),
    )
    op.create_index('ix_variants_product_id', 'variants', ['product_id'])
    op.create_index('ix_variants_color', 'variants', ['color'])
    op.create_index('ix_variants_stock', 'variants', ['stock'])

    op.create_table(
        'students',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=50), nullable=False),
        sa.Column('age', sa.Integer(), nullable=False),
        sa.Column('course', sa.String(length=50), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=True, unique=True),
        sa.Column('enrollment_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('ix_students_name', 'students', ['name'])
    op.create_index('ix_students_course', 'students', ['course'])
    op.create_index('ix_students_created_at', 'students', ['created_at'])

    op.create_table(
        'accounts',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=100), nullable=False, unique=True),
        sa.Column('balance', sa.Numeric(14, 2), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint('balance >= 0', name='ck_account_balance_non_negative'),
    )


def downgrade():
    op.drop_table('accounts')
    op.drop_index('ix_students_created_at', table_name='students')
    op.drop_index('ix_students_course', table_name='students')
    op.drop_index('ix_students_name', table_name='students')
    op.drop_table('students')
    op.drop_index('ix_variants_stock', table_name='variants')
    op.drop_index('ix_variants_color', table_name='variants')
    op.drop_index('ix_variants_product_id', table_name='variants')
    op.drop_table('variants')
    op.drop_index('ix_products_category_price', table_name='products')
    op.drop_index('ix_products_created_at', table_name='products')
    op.drop_index('ix_products_is_active', table_name='products')
    op.drop_table('products')
