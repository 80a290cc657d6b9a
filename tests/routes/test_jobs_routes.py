from arq.jobs import JobStatus
from fastapi.testclient import TestClient

from agenda_service.main import app
from agenda_service.routes import jobs
from agenda_service.worker import DAILY_AGENDA_TASK

client = TestClient(app)


class FakeJob:
    def __init__(self, job_id: str, pool=None, status: JobStatus = JobStatus.complete, result=None):
        self.job_id = job_id
        self._status = status
        self._result = result

    async def status(self):
        return self._status

    async def result(self):
        if isinstance(self._result, Exception):
            raise self._result
        return self._result


class FakePool:
    def __init__(self, job=None):
        self.job = job
        self.enqueued = []
        self.closed = False

    async def enqueue_job(self, name, *args, **kwargs):
        self.enqueued.append(name)
        return self.job

    async def close(self):
        self.closed = True


def install_pool(monkeypatch, pool: FakePool) -> None:
    async def fake_create_pool(settings):
        return pool

    monkeypatch.setattr(jobs, 'create_pool', fake_create_pool)


def test_enqueue_daily_agenda(monkeypatch) -> None:
    pool = FakePool(job=FakeJob('job-1'))
    install_pool(monkeypatch, pool)

    response = client.post('/jobs/daily-agenda')

    assert response.status_code == 202
    assert response.json() == {'jobId': 'job-1', 'status': 'queued'}
    assert pool.enqueued == [DAILY_AGENDA_TASK]
    assert pool.closed


def test_enqueue_reports_duplicate_job(monkeypatch) -> None:
    install_pool(monkeypatch, FakePool(job=None))

    response = client.post('/jobs/daily-agenda')

    assert response.status_code == 409
    assert response.json()['success'] is False


def test_enqueue_without_queue_returns_503(monkeypatch) -> None:
    async def failing_create_pool(settings):
        raise ConnectionError('redis down')

    monkeypatch.setattr(jobs, 'create_pool', failing_create_pool)

    response = client.post('/jobs/daily-agenda')

    assert response.status_code == 503
    assert response.json() == {'success': False, 'error': 'Job queue unavailable'}


def test_completed_job_returns_summary(monkeypatch) -> None:
    summary = {'message': 'Agenda notifications processed', 'processed_count': 1, 'results': []}
    install_pool(monkeypatch, FakePool())
    monkeypatch.setattr(jobs, 'Job', lambda job_id, pool: FakeJob(job_id, result=summary))

    response = client.get('/jobs/status/job-1')

    assert response.status_code == 200
    assert response.json() == {'jobId': 'job-1', 'status': 'complete', 'result': summary, 'error': None}


def test_failed_job_reports_error(monkeypatch) -> None:
    install_pool(monkeypatch, FakePool())
    monkeypatch.setattr(jobs, 'Job', lambda job_id, pool: FakeJob(job_id, result=RuntimeError('db down')))

    body = client.get('/jobs/status/job-1').json()

    assert body['status'] == 'failed'
    assert body['error'] == 'db down'


def test_queued_and_missing_jobs(monkeypatch) -> None:
    install_pool(monkeypatch, FakePool())

    monkeypatch.setattr(jobs, 'Job', lambda job_id, pool: FakeJob(job_id, status=JobStatus.queued))
    assert client.get('/jobs/status/job-1').json()['status'] == 'queued'

    monkeypatch.setattr(jobs, 'Job', lambda job_id, pool: FakeJob(job_id, status=JobStatus.not_found))
    response = client.get('/jobs/status/job-1')
    assert response.status_code == 404
    assert response.json() == {'success': False, 'error': 'Job not found'}
