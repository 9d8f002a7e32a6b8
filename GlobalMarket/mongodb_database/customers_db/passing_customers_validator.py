from GlobalMarket.mongodb_database.collection_registry import get_collection
from GlobalMarket.mongodb_database.collection_setup import apply_collection
from GlobalMarket.mongodb_database.connection import get_database


def main():
    db = get_database()
    outcome = apply_collection(db, get_collection("customers"))
    if outcome == "modified":
        print("Validator applied to existing collection 'customers'!")
    else:
        print("Collection 'customers' created with validator!")
    print("Indexes created successfully!")


if __name__ == "__main__":
    main()
