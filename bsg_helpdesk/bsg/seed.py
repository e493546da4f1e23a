# bsg_helpdesk/bsg/seed.py
"""Demo catalog: the common BSG field library, two categories and master data."""
from sqlalchemy.orm import Session

from bsg_helpdesk.bsg import services as bsg_service
from bsg_helpdesk.bsg.models import MasterDataEntity
from bsg_helpdesk.bsg.schemas import CategoryCreate, MasterDataCreate, TemplateCreate, TemplateFieldCreate
from bsg_helpdesk.core.logging import get_logger

logger = get_logger(__name__)

COMMON_FIELDS: dict[str, TemplateFieldCreate] = {
    "Cabang/Capem": TemplateFieldCreate(
        field_name="Cabang/Capem", field_label="Cabang/Capem", field_type="dropdown_branch",
        is_required=True, category="location", placeholder_text="Pilih Cabang/Capem",
        help_text="Pilih cabang atau kantor cabang pembantu tempat Anda bertugas",
    ),
    "Kode User": TemplateFieldCreate(
        field_name="Kode User", field_label="Kode User", field_type="text_short",
        is_required=True, category="user_identity", placeholder_text="Contoh: U001", max_length=10,
    ),
    "Nama User": TemplateFieldCreate(
        field_name="Nama User", field_label="Nama User", field_type="text",
        is_required=True, category="user_identity", placeholder_text="Nama lengkap user",
    ),
    "Jabatan": TemplateFieldCreate(
        field_name="Jabatan", field_label="Jabatan", field_type="text",
        is_required=True, category="user_identity", placeholder_text="Contoh: Teller, Customer Service",
    ),
    "Kantor Kas": TemplateFieldCreate(
        field_name="Kantor Kas", field_label="Kantor Kas", field_type="text",
        category="location", placeholder_text="Nama kantor kas",
    ),
    "Tanggal berlaku": TemplateFieldCreate(
        field_name="Tanggal berlaku", field_label="Tanggal Berlaku", field_type="date",
        is_required=True, category="timing", placeholder_text="YYYY-MM-DD",
    ),
    "Mutasi dari Cabang / Capem": TemplateFieldCreate(
        field_name="Mutasi dari Cabang / Capem", field_label="Mutasi dari Cabang/Capem",
        field_type="dropdown_branch", category="transfer", placeholder_text="Pilih cabang asal",
    ),
    "Program Fasilitas OLIBS": TemplateFieldCreate(
        field_name="Program Fasilitas OLIBS", field_label="Program Fasilitas OLIBS",
        field_type="dropdown_olibs_menu", is_required=True, category="permissions",
    ),
    "Nama Nasabah": TemplateFieldCreate(
        field_name="Nama Nasabah", field_label="Nama Nasabah", field_type="text",
        is_required=True, category="customer",
    ),
    "Nomor Rekening": TemplateFieldCreate(
        field_name="Nomor Rekening", field_label="Nomor Rekening", field_type="number",
        is_required=True, category="customer",
    ),
    "Nominal Transaksi": TemplateFieldCreate(
        field_name="Nominal Transaksi", field_label="Nominal Transaksi", field_type="currency",
        is_required=True, category="transaction", placeholder_text="Masukkan nominal transaksi",
    ),
    "Nomor Arsip": TemplateFieldCreate(
        field_name="Nomor Arsip", field_label="Nomor Arsip", field_type="text",
        is_required=True, category="reference",
    ),
}

DEMO_CATEGORIES = [
    CategoryCreate(name="OLIBS", display_name="OLIBS", description="Core banking user administration", sort_order=1),
    CategoryCreate(name="KLAIM", display_name="Klaim", description="Transaction claims", sort_order=2),
]

# (category, number, name, description, common fields)
DEMO_TEMPLATES = [
    ("OLIBS", 1, "Perubahan Menu & Limit Transaksi", "Change menu access and transaction limits",
     ["Cabang/Capem", "Kode User", "Nama User", "Jabatan", "Program Fasilitas OLIBS", "Tanggal berlaku"]),
    ("OLIBS", 2, "Mutasi User Pegawai", "Move a user between branches",
     ["Cabang/Capem", "Kode User", "Nama User", "Jabatan", "Mutasi dari Cabang / Capem", "Tanggal berlaku"]),
    ("KLAIM", 3, "Klaim ATM", "Claim for a failed ATM transaction",
     ["Cabang/Capem", "Nama Nasabah", "Nomor Rekening", "Nominal Transaksi", "Nomor Arsip"]),
]

DEMO_MASTER_DATA = {
    "branch": [
        MasterDataCreate(code="001", name="Kantor Pusat", display_name="001 - Kantor Pusat", sort_order=1),
        MasterDataCreate(code="002", name="Cabang Utama Manado", display_name="002 - Cabang Utama Manado", sort_order=2),
        MasterDataCreate(code="003", name="Cabang Gorontalo", display_name="003 - Cabang Gorontalo", sort_order=3),
    ],
    "olibs_menu": [
        MasterDataCreate(code="TLR", name="Teller", sort_order=1),
        MasterDataCreate(code="CS", name="Customer Service", sort_order=2),
        MasterDataCreate(code="BO", name="Back Office", sort_order=3),
    ],
}


def seed_demo_data(db: Session) -> bool:
    """Load the demo catalog once. Returns False when it was already there."""
    if bsg_service.get_category_by_name(db, DEMO_CATEGORIES[0].name):
        return False

    categories = {c.name: bsg_service.create_category(db, c) for c in DEMO_CATEGORIES}
    for category, number, name, description, field_names in DEMO_TEMPLATES:
        fields = [
            COMMON_FIELDS[n].model_copy(update={"sort_order": i})
            for i, n in enumerate(field_names)
        ]
        bsg_service.create_template(
            db,
            TemplateCreate(
                category_id=categories[category].id,
                template_number=number,
                name=name,
                description=description,
                fields=fields,
            ),
        )

    for data_type, items in DEMO_MASTER_DATA.items():
        if db.query(MasterDataEntity).filter(MasterDataEntity.data_type == data_type).first():
            continue
        for item in items:
            bsg_service.create_master_data(db, data_type, item)

    logger.info(
        "Seeded %d categories, %d templates, %d master data types",
        len(DEMO_CATEGORIES), len(DEMO_TEMPLATES), len(DEMO_MASTER_DATA),
    )
    return True
