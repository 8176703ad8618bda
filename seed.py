"""Initial pharmacy catalog, inserted when the products collection is empty."""

import logging

from pymongo.database import Database

from schemas import Product
from storage import PRODUCTS

logger = logging.getLogger(__name__)

IMAGES = "/attached_assets/generated_images"

INITIAL_PRODUCTS = [
    {
        "name": "Vitamina C 1000mg",
        "description": "Suplemento de vitamina C de alta potencia para fortalecer el sistema inmunológico. 60 comprimidos.",
        "price": "24.99",
        "category": "Suplementos",
        "image_url": f"{IMAGES}/vitamin_supplement_product.png",
        "stock": 150,
    },
    {
        "name": "Ibuprofeno 400mg",
        "description": "Analgésico y antiinflamatorio para el alivio del dolor y la fiebre. 20 comprimidos.",
        "price": "8.50",
        "category": "Medicamentos",
        "image_url": f"{IMAGES}/pain_medication_product.png",
        "stock": 200,
    },
    {
        "name": "Gel Antibacterial 500ml",
        "description": "Gel desinfectante para manos con 70% de alcohol. Elimina el 99.9% de gérmenes.",
        "price": "6.99",
        "category": "Cuidado Personal",
        "image_url": f"{IMAGES}/hand_sanitizer_product.png",
        "stock": 180,
    },
    {
        "name": "Omega-3 Fish Oil",
        "description": "Suplemento de aceite de pescado rico en EPA y DHA para la salud cardiovascular. 90 cápsulas.",
        "price": "32.99",
        "category": "Suplementos",
        "image_url": f"{IMAGES}/omega-3_supplement_product.png",
        "stock": 120,
    },
    {
        "name": "Antihistamínico Loratadina 10mg",
        "description": "Tratamiento para alergias estacionales y rinitis alérgica. 30 comprimidos.",
        "price": "12.99",
        "category": "Medicamentos",
        "image_url": f"{IMAGES}/allergy_medication_product.png",
        "stock": 100,
    },
    {
        "name": "Vendas Adhesivas Surtidas",
        "description": "Caja con 40 vendas adhesivas de diferentes tamaños para primeros auxilios.",
        "price": "5.99",
        "category": "Cuidado Personal",
        "image_url": f"{IMAGES}/bandages_product.png",
        "stock": 250,
    },
    {
        "name": "Probiótico Multi-Cepa",
        "description": "10 mil millones de CFU con 8 cepas probióticas diferentes para la salud digestiva. 30 cápsulas.",
        "price": "29.99",
        "category": "Suplementos",
        "image_url": f"{IMAGES}/probiotic_supplement_product.png",
        "stock": 90,
    },
    {
        "name": "Crema Hidratante Facial SPF 30",
        "description": "Crema facial con protección solar para hidratación y cuidado diario de la piel. 50ml.",
        "price": "18.99",
        "category": "Cuidado Personal",
        "image_url": f"{IMAGES}/face_cream_product.png",
        "stock": 140,
    },
    {
        "name": "Paracetamol 500mg",
        "description": "Analgésico y antipirético para el alivio del dolor leve a moderado y fiebre. 30 comprimidos.",
        "price": "6.99",
        "category": "Medicamentos",
        "image_url": f"{IMAGES}/pain_medication_product.png",
        "stock": 220,
    },
    {
        "name": "Multivitamínico Completo",
        "description": "Fórmula completa con vitaminas A, C, D, E, B y minerales esenciales. 60 comprimidos.",
        "price": "21.99",
        "category": "Suplementos",
        "image_url": f"{IMAGES}/vitamin_supplement_product.png",
        "stock": 160,
    },
    {
        "name": "Jarabe para la Tos",
        "description": "Jarabe expectorante para aliviar la tos y congestión. 120ml.",
        "price": "9.99",
        "category": "Medicamentos",
        "image_url": f"{IMAGES}/pain_medication_product.png",
        "stock": 85,
    },
    {
        "name": "Termómetro Digital",
        "description": "Termómetro digital de lectura rápida con pantalla LCD. Precisión de 0.1°C.",
        "price": "14.99",
        "category": "Cuidado Personal",
        "image_url": f"{IMAGES}/bandages_product.png",
        "stock": 75,
    },
]


def seed_initial_products(db: Database) -> int:
    """Insert the initial catalog if there are no products. Returns the number inserted."""
    if db[PRODUCTS].count_documents({}) > 0:
        return 0
    docs = [Product(**p).model_dump() for p in INITIAL_PRODUCTS]
    db[PRODUCTS].insert_many(docs)
    logger.info("Seeded %d products", len(docs))
    return len(docs)
