"""
Tests for the visitor counter
"""
import threading

from sqlalchemy.orm import sessionmaker

from film_distribution.db import Base, create_db_engine
from film_distribution.storage import DatabaseStorage


class TestVisitorCounter:

    def test_fresh_counter_starts_at_one(self, storage):
        assert storage.visitor_counter.get_count().value == 0
        assert storage.visitor_counter.increment() == 1
        assert storage.visitor_counter.increment() == 2
        assert storage.visitor_counter.get_count().value == 2

    def test_concurrent_increments_are_not_lost(self, tmp_path):
        """Separate connections incrementing at once each see a distinct value"""
        engine = create_db_engine(f"sqlite:///{tmp_path / 'counter.db'}")
        Base.metadata.create_all(bind=engine)
        Session = sessionmaker(autocommit=False, autoflush=False, bind=engine)

        workers = 4
        per_worker = 25
        seen = []
        errors = []
        lock = threading.Lock()
        start = threading.Barrier(workers)

        def work():
            session = Session()
            try:
                counter = DatabaseStorage(session).visitor_counter
                start.wait()
                for _ in range(per_worker):
                    value = counter.increment()
                    with lock:
                        seen.append(value)
            except Exception as e:
                errors.append(e)
            finally:
                session.close()

        threads = [threading.Thread(target=work) for _ in range(workers)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        session = Session()
        try:
            final = DatabaseStorage(session).visitor_counter.get_count().unwrap()
        finally:
            session.close()
            engine.dispose()

        assert errors == []
        assert final == workers * per_worker
        assert sorted(seen) == list(range(1, workers * per_worker + 1))
